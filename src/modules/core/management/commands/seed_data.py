from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.core.identity import CallerIdentity, Role
from modules.orders.dtos import OrderDataDTO, OrderItemDataDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderItemDjangoRepository,
)
from modules.orders.services import OrderItemService, OrderService

SEED_COMMENT_PREFIX = "Seed order"


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=20,
            help="Number of demo orders to create (default: 20).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        orders_created, items_created = self._seed_orders(options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"orders={orders_created}, "
                f"items={items_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        accounts = [
            ("admin", "admin123", Role.ADMIN),
            ("manager", "manager123", Role.MANAGER),
            ("user", "user123", Role.USER),
        ]
        for username, password, role in accounts:
            group, _ = Group.objects.get_or_create(name=role.value)
            user = User.objects.filter(username=username).first()
            if user is None:
                if role is Role.ADMIN:
                    user = User.objects.create_superuser(username, password=password)
                else:
                    user = User.objects.create_user(username, password=password)
                created += 1
            user.groups.add(group)
        return created

    def _seed_orders(self, count: int) -> tuple[int, int]:
        self.stdout.write("Creating orders...")
        if Order.objects.filter(comments__startswith=SEED_COMMENT_PREFIX).exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0, 0

        order_repository = OrderDjangoRepository()
        item_repository = OrderItemDjangoRepository()
        order_service = OrderService(order_repository, item_repository)
        item_service = OrderItemService(order_repository, item_repository)
        caller = CallerIdentity.system()

        clients = [
            ("Ana Souza", "555-0101", "ana@example.com"),
            ("Bruno Lima", "555-0102", "bruno@example.com"),
            ("Carla Mendes", "555-0103", "carla@example.com"),
            ("Daniel Costa", "555-0104", "daniel@example.com"),
            ("Helena Ferreira", "555-0105", "helena@example.com"),
        ]
        catalog = [
            ("Monitor 27\"", "MON-27", "A", Decimal("1299.90")),
            ("Mechanical keyboard", "KBD-01", "B", Decimal("399.90")),
            ("Office desk", "DSK-01", "A", Decimal("899.00")),
            ("Ergonomic chair", "CHR-02", "C", Decimal("1499.00")),
            ("A4 paper", "PAP-A4", "A", Decimal("29.90")),
            ("Blue pen", "PEN-BL", "A", Decimal("4.90")),
        ]
        statuses = ["Pending", "In progress", "Shipped", "Done"]

        items_created = 0
        today = timezone.localdate()
        for i in range(count):
            client_name, phone, email = random.choice(clients)
            order = order_service.create_order(
                OrderDataDTO(
                    order_name=f"Order {i + 1}",
                    client_name=client_name,
                    client_phone_number=phone,
                    client_email=email,
                    order_term=today + timedelta(days=random.randint(1, 60)),
                    order_status=random.choice(statuses),
                    comments=f"{SEED_COMMENT_PREFIX} {i + 1}",
                ),
                caller=caller,
            )
            for name, code, revision, price in random.sample(
                catalog, k=random.randint(1, 4)
            ):
                item_service.add_item(
                    str(order.id),
                    OrderItemDataDTO(
                        item_name=name,
                        item_code=code,
                        item_revision=revision,
                        item_count=random.randint(1, 5),
                        item_price=price,
                    ),
                    caller=caller,
                )
                items_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count, items_created
