from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, default=None, null=True
                    ),
                ),
                (
                    "order_number",
                    models.CharField(editable=False, max_length=13, unique=True),
                ),
                ("order_name", models.CharField(max_length=50)),
                ("client_name", models.CharField(max_length=50)),
                (
                    "client_phone_number",
                    models.CharField(blank=True, default="", max_length=20),
                ),
                (
                    "client_email",
                    models.EmailField(blank=True, default="", max_length=50),
                ),
                ("order_term", models.DateField()),
                (
                    "order_status",
                    models.CharField(default="Pending", max_length=50),
                ),
                (
                    "order_price",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                (
                    "comments",
                    models.CharField(blank=True, default="", max_length=200),
                ),
                ("order_update_date", models.DateField()),
            ],
            options={
                "db_table": "orders",
                "ordering": [
                    "-order_update_date",
                    "order_term",
                    "client_name",
                    "order_name",
                ],
                "indexes": [
                    models.Index(
                        fields=["-order_update_date", "order_term"],
                        name="orders_update_term_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, default=None, null=True
                    ),
                ),
                ("item_name", models.CharField(max_length=50)),
                ("item_code", models.CharField(blank=True, default="", max_length=50)),
                (
                    "item_revision",
                    models.CharField(blank=True, default="", max_length=50),
                ),
                ("item_count", models.PositiveIntegerField(default=0)),
                (
                    "item_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=10,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        editable=False,
                        max_digits=12,
                    ),
                ),
                (
                    "link_to_img",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("item_update_date", models.DateField()),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_items",
                "ordering": ["item_name"],
                "indexes": [
                    models.Index(
                        fields=["order", "deleted_at"], name="order_items_alive_idx"
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("item_price__gte", 0)),
                        name="order_items_price_non_negative",
                    ),
                ],
            },
        ),
    ]
