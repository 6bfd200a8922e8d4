from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.accounts.identity import Actor
from modules.accounts.models import UserRole
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.reservations.constants import ReservationStatus
from modules.reservations.dtos import CreateReservationDTO
from modules.reservations.exceptions import InsufficientStock, OversellError
from modules.reservations.repositories.django_repository import (
    ReservationDjangoRepository,
)
from modules.reservations.services import ReservationService


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reservations",
            type=int,
            default=20,
            help="Number of reservations to create (default: 20).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        sellers, buyers = self._seed_users()
        products = self._seed_products(sellers)
        reservations_created = self._seed_reservations(
            buyers, products, options["reservations"]
        )

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"sellers={len(sellers)}, "
                f"buyers={len(buyers)}, "
                f"products={len(products)}, "
                f"reservations={reservations_created}"
            )
        )

    def _seed_users(self):
        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123", role=UserRole.ADMIN)

        sellers = []
        for username, store in [("loja_ana", "Brechó da Ana"), ("loja_bruno", "Bruno Eletro")]:
            seller, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "role": UserRole.SELLER,
                    "store_name": store,
                    "email": f"{username}@example.com",
                    "whatsapp_link": f"https://wa.me/55119{random.randint(10000000, 99999999)}",
                },
            )
            if created:
                seller.set_password("seller123")
                seller.save(update_fields=["password"])
            sellers.append(seller)

        buyers = []
        for username in ["carla", "daniel", "helena"]:
            buyer, created = User.objects.get_or_create(
                username=username,
                defaults={"role": UserRole.BUYER, "email": f"{username}@example.com"},
            )
            if created:
                buyer.set_password("buyer123")
                buyer.save(update_fields=["password"])
            buyers.append(buyer)
        return sellers, buyers

    def _seed_products(self, sellers) -> list[Product]:
        self.stdout.write("Creating products...")
        service = ProductService(repository=ProductDjangoRepository())
        catalog = [
            ("Jaqueta Jeans", Decimal("89.90")),
            ("Vestido Floral", Decimal("59.90")),
            ("Bolsa de Couro", Decimal("149.00")),
            ("Tênis Casual", Decimal("119.90")),
            ("Fone Bluetooth", Decimal("199.90")),
            ("Carregador Turbo", Decimal("49.90")),
            ("Caixa de Som", Decimal("249.00")),
            ("Smartwatch", Decimal("399.00")),
        ]
        products: list[Product] = []
        for index, (name, price) in enumerate(catalog):
            seller = sellers[index % len(sellers)]
            product = Product.objects.alive().filter(seller=seller, name=name).first()
            if product is None:
                product = service.create_product(
                    Actor.from_user(seller),
                    CreateProductDTO(
                        name=name, price=price, quantity=random.randint(1, 10)
                    ),
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_reservations(self, buyers, products: list[Product], count: int) -> int:
        """Reservations go through the service so the ledger stays consistent."""
        self.stdout.write("Creating reservations...")
        if not buyers or not products:
            self.stdout.write(self.style.WARNING("Skipping reservations (no buyers/products)."))
            return 0

        service = ReservationService(
            reservation_repository=ReservationDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        outcomes = [
            (ReservationStatus.PENDING, 0.40),
            (ReservationStatus.CONFIRMED, 0.25),
            (ReservationStatus.SOLD, 0.20),
            (ReservationStatus.CANCELED, 0.15),
        ]
        statuses = [s for s, _ in outcomes]
        weights = [w for _, w in outcomes]

        created = 0
        for _ in range(count):
            buyer = random.choice(buyers)
            product = random.choice(products)
            target = random.choices(statuses, weights=weights, k=1)[0]
            try:
                reservation = service.create_reservation(
                    Actor.from_user(buyer),
                    CreateReservationDTO(product_id=product.id, quantity=1),
                )
                if target != ReservationStatus.PENDING:
                    service.transition_reservation(
                        Actor.from_user(product.seller), str(reservation.id), target
                    )
            except (InsufficientStock, OversellError) as exc:
                self.stdout.write(self.style.WARNING(f"Skipped reservation: {exc}"))
                continue
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating reservations... Done!"))
        return created
