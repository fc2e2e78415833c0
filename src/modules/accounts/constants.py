"""Account field limits."""

USERNAME_MIN_LENGTH = 5
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8
PERSON_NAME_MAX_LENGTH = 50
