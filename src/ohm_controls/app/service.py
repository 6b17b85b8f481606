"""Wires repositories and resource handlers together for the demo service."""

from dataclasses import dataclass

from ohm_controls.config import Settings
from ohm_controls.spec.base import SpecDocument
from .domain import Customer, Order
from .repository import InMemoryRepository
from .resources import CustomerResource, EntryResource, OrderResource

SAMPLE_CUSTOMERS = ["Alice", "Bob"]
SAMPLE_PRODUCTS = ["keyboard", "mouse", "monitor", "laptop", "headset", "webcam", "dock"]


@dataclass
class DemoService:
    entry: EntryResource
    customers: CustomerResource
    orders: OrderResource


def build_service(document: SpecDocument, settings: Settings | None = None, seed: bool = True) -> DemoService:
    settings = settings or Settings()
    customer_repo = InMemoryRepository()
    order_repo = InMemoryRepository()
    if seed:
        seed_store(customer_repo, order_repo)
    return DemoService(
        entry=EntryResource(document),
        customers=CustomerResource(customer_repo, order_repo, document, settings),
        orders=OrderResource(order_repo, customer_repo, document, settings),
    )


def seed_store(customers: InMemoryRepository, orders: InMemoryRepository) -> None:
    """Sample data: every customer gets one order per sample product."""
    for name in SAMPLE_CUSTOMERS:
        customer = customers.save(Customer(name=name))
        for i, product in enumerate(SAMPLE_PRODUCTS):
            orders.save(Order(product=product, cost=10.0 * (i + 1), customer_id=customer.id))
