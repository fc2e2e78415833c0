"""Unit tests for the domain error model and its DRF rendering."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, Field

from django.http import QueryDict

from rest_framework import exceptions as drf_exceptions

from modules.core.exceptions import (
    HTTP_STATUS_BY_KIND,
    ErrorKind,
    InvalidInput,
    NotFound,
    api_exception_handler,
)
from modules.core.validation import parse_dto
from modules.orders.exceptions import (
    ConcurrentOrderModification,
    OrderItemNotFound,
    OrderNotFound,
    OrderNumberGenerationExhausted,
)

pytestmark = pytest.mark.unit


class _SampleDTO(BaseModel):
    name: str = Field(min_length=1)
    count: int = Field(ge=0)


class TestErrorKinds:
    @pytest.mark.parametrize(
        "exc_class, kind",
        [
            (OrderNotFound, ErrorKind.NOT_FOUND),
            (OrderItemNotFound, ErrorKind.NOT_FOUND),
            (OrderNumberGenerationExhausted, ErrorKind.GENERATION_EXHAUSTED),
            (ConcurrentOrderModification, ErrorKind.CONFLICT),
        ],
    )
    def test_order_errors_carry_kind(self, exc_class, kind):
        assert exc_class("boom").kind is kind

    def test_every_kind_has_a_status(self):
        assert set(HTTP_STATUS_BY_KIND) == set(ErrorKind)

    def test_invalid_input_lists_fields(self):
        exc = InvalidInput({"item_price": "bad", "item_count": "bad"})
        assert exc.kind is ErrorKind.VALIDATION
        assert exc.message == "Invalid value for: item_count, item_price."


class TestApiExceptionHandler:
    def test_not_found_maps_to_404(self):
        response = api_exception_handler(OrderNotFound("Order x not found."), {})
        assert response.status_code == 404
        assert response.data == {
            "type": "client_error",
            "errors": [
                {"code": "not_found", "detail": "Order x not found.", "attr": None}
            ],
        }

    def test_field_errors_become_one_entry_per_field(self):
        response = api_exception_handler(
            InvalidInput({"order_name": "required", "order_term": "invalid"}), {}
        )
        assert response.status_code == 400
        attrs = {error["attr"] for error in response.data["errors"]}
        assert attrs == {"order_name", "order_term"}

    def test_generation_exhausted_is_server_error(self):
        response = api_exception_handler(OrderNumberGenerationExhausted("no"), {})
        assert response.status_code == 500
        assert response.data["type"] == "server_error"
        assert response.data["errors"][0]["code"] == "generation_exhausted"

    def test_drf_errors_use_same_envelope(self):
        exc = drf_exceptions.ValidationError({"name": ["This field is required."]})
        response = api_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data["type"] == "client_error"
        assert response.data["errors"] == [
            {"code": "invalid", "detail": "This field is required.", "attr": "name"}
        ]

    def test_drf_detail_has_no_attr(self):
        response = api_exception_handler(drf_exceptions.NotAuthenticated(), {})
        assert response.status_code == 401
        assert response.data["errors"][0]["attr"] is None
        assert response.data["errors"][0]["code"] == "not_authenticated"

    def test_unknown_exceptions_propagate(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None

    def test_base_not_found_is_rendered(self):
        assert api_exception_handler(NotFound("gone"), {}).status_code == 404


class TestParseDto:
    def test_valid_payload(self):
        dto = parse_dto(_SampleDTO, {"name": "x", "count": 1})
        assert dto.count == 1

    def test_invalid_payload_raises_invalid_input(self):
        with pytest.raises(InvalidInput) as exc_info:
            parse_dto(_SampleDTO, {"name": "", "count": -1})
        assert set(exc_info.value.errors) == {"name", "count"}

    def test_missing_field_is_reported(self):
        with pytest.raises(InvalidInput) as exc_info:
            parse_dto(_SampleDTO, {"name": "x"})
        assert exc_info.value.errors["count"] == "Field required"

    def test_non_object_body_is_rejected(self):
        with pytest.raises(InvalidInput) as exc_info:
            parse_dto(_SampleDTO, ["not", "an", "object"])
        assert "non_field_errors" in exc_info.value.errors

    def test_form_data_is_flattened(self):
        dto = parse_dto(_SampleDTO, QueryDict("name=x&count=3"))
        assert dto.name == "x"
        assert dto.count == 3
