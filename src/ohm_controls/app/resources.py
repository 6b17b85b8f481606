"""Resource handlers of the demo service.

Each handler performs the repository call, then asks the control layer for
the next actions that make sense for the result and wraps both into an
OhmResponse.
"""

import logging

from ohm_controls.config import Settings
from ohm_controls.controls import ControlSetBuilder, OhmResponse, PageState, add_pagination, resolve_or_none
from ohm_controls.errors import BadRequest, EntityNotFound
from ohm_controls.spec.base import HttpMethod, SpecDocument
from .domain import Customer, Order
from .repository import InMemoryRepository, PageRequest

logger = logging.getLogger(__name__)

CUSTOMERS = "/api/customers"
CUSTOMER = "/api/customers/{id}"
CUSTOMER_ORDERS = "/api/customers/{id}/orders"
ORDERS = "/api/orders"
ORDER = "/api/orders/{id}"


def add_entry_controls(builder: ControlSetBuilder, document: SpecDocument) -> ControlSetBuilder:
    """Controls reachable from the API entry point."""
    builder.add(document, CUSTOMERS, HttpMethod.GET)
    builder.add(document, CUSTOMERS, HttpMethod.POST)
    builder.add(document, ORDERS, HttpMethod.GET)
    builder.add(document, ORDERS, HttpMethod.POST)
    return builder


class EntryResource:
    def __init__(self, document: SpecDocument):
        self.document = document

    def get_entities(self) -> OhmResponse:
        return OhmResponse.no_content(add_entry_controls(ControlSetBuilder(), self.document))


class CustomerResource:
    def __init__(self, customers: InMemoryRepository, orders: InMemoryRepository,
                 document: SpecDocument, settings: Settings | None = None):
        self.customers = customers
        self.orders = orders
        self.document = document
        self.settings = settings or Settings()

    def create_customer(self, customer: Customer) -> OhmResponse:
        logger.debug("REST request to save Customer : %s", customer)
        if customer.id is not None:
            raise BadRequest("A new customer cannot already have an ID")
        result = self.customers.save(customer)
        return OhmResponse.of(result, self._customer_controls(result))

    def update_customer(self, customer_id: int, customer: Customer) -> OhmResponse:
        logger.debug("REST request to update Customer : %s", customer)
        self._get(customer_id)
        result = self.customers.save(customer.model_copy(update={"id": customer_id}))
        return OhmResponse.of(result, self._customer_controls(result))

    def get_all_customers(self) -> OhmResponse:
        logger.debug("REST request to get all Customers")
        customers = self.customers.find_all()
        builder = ControlSetBuilder()
        for customer in customers:
            builder.add(self.document, CUSTOMER, HttpMethod.GET, {"id": customer.id},
                        summary=f"Get customer {customer.name}")
        builder.add(self.document, CUSTOMERS, HttpMethod.POST)
        return OhmResponse.of(customers, builder)

    def get_customer(self, customer_id: int) -> OhmResponse:
        logger.debug("REST request to get Customer : %s", customer_id)
        customer = self._get(customer_id)
        return OhmResponse.of(customer, self._customer_controls(customer))

    def delete_customer(self, customer_id: int) -> OhmResponse:
        logger.debug("REST request to delete Customer : %s", customer_id)
        self.customers.delete_by_id(customer_id)
        return OhmResponse.no_content(add_entry_controls(ControlSetBuilder(), self.document))

    def _get(self, customer_id: int) -> Customer:
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise EntityNotFound("Customer", customer_id)
        return customer

    def _customer_controls(self, customer: Customer) -> ControlSetBuilder:
        bindings = {"id": customer.id}
        builder = ControlSetBuilder()
        builder.add(self.document, CUSTOMER, HttpMethod.GET, bindings)
        builder.add(self.document, CUSTOMER, HttpMethod.PUT, bindings)
        if customer.id > self.settings.deletion_floor:
            builder.add(self.document, CUSTOMER, HttpMethod.DELETE, bindings)
        builder.add(self.document, CUSTOMER_ORDERS, HttpMethod.GET, bindings,
                    summary=f"Get the orders of {customer.name}")
        if self.orders.count_by("customer_id", customer.id) < self.settings.max_orders:
            builder.add(self.document, ORDERS, HttpMethod.POST,
                        summary=f"Create a new order for {customer.name}")
        builder.add(self.document, CUSTOMERS, HttpMethod.GET)
        return builder


class OrderResource:
    def __init__(self, orders: InMemoryRepository, customers: InMemoryRepository,
                 document: SpecDocument, settings: Settings | None = None):
        self.orders = orders
        self.customers = customers
        self.document = document
        self.settings = settings or Settings()

    def create_order(self, order: Order) -> OhmResponse:
        logger.debug("REST request to save Order : %s", order)
        if order.id is not None:
            raise BadRequest("A new order cannot already have an ID")
        result = self.orders.save(order)
        return OhmResponse.of(result, self._order_controls(result))

    def update_order(self, order_id: int, order: Order) -> OhmResponse:
        logger.debug("REST request to update Order : %s", order)
        self._get(order_id)
        result = self.orders.save(order.model_copy(update={"id": order_id}))
        return OhmResponse.of(result, self._order_controls(result))

    def get_all_orders(self, request: PageRequest | None = None) -> OhmResponse:
        logger.debug("REST request to get a page of Orders")
        request = request or PageRequest(size=self.settings.default_page_size)
        page = self.orders.find_page(request)
        builder = self._page_controls(page)
        base = resolve_or_none(self.document, ORDERS, HttpMethod.GET)
        self._paginate(builder, base, page)
        builder.add(self.document, ORDERS, HttpMethod.POST)
        return OhmResponse.of(page.content, builder)

    def get_customer_orders(self, customer_id: int, request: PageRequest | None = None) -> OhmResponse:
        logger.debug("REST request to get orders of Customer : %s", customer_id)
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise EntityNotFound("Customer", customer_id)
        request = request or PageRequest(size=self.settings.default_page_size)
        page = self.orders.find_page(request, "customer_id", customer_id)
        builder = self._page_controls(page)
        base = resolve_or_none(self.document, CUSTOMER_ORDERS, HttpMethod.GET, {"id": customer_id},
                               summary=f"Get the orders of {customer.name}")
        self._paginate(builder, base, page)
        builder.add(self.document, CUSTOMER, HttpMethod.GET, {"id": customer_id},
                    summary=f"Get customer {customer.name}")
        return OhmResponse.of(page.content, builder)

    def get_order(self, order_id: int) -> OhmResponse:
        logger.debug("REST request to get Order : %s", order_id)
        order = self._get(order_id)
        return OhmResponse.of(order, self._order_controls(order))

    def delete_order(self, order_id: int) -> OhmResponse:
        logger.debug("REST request to delete Order : %s", order_id)
        self.orders.delete_by_id(order_id)
        return OhmResponse.no_content(add_entry_controls(ControlSetBuilder(), self.document))

    def _get(self, order_id: int) -> Order:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise EntityNotFound("Order", order_id)
        return order

    def _paginate(self, builder: ControlSetBuilder, base, page) -> None:
        if base is None:
            return
        if page.number >= max(page.total_pages, 1):
            # past the last page: no navigation, only the base listing
            builder.insert(base)
            return
        add_pagination(builder, base, PageState.from_page(page))

    def _page_controls(self, page) -> ControlSetBuilder:
        builder = ControlSetBuilder()
        for order in page.content:
            builder.add(self.document, ORDER, HttpMethod.GET, {"id": order.id},
                        summary=f"Get order {order.id} ({order.product})")
        return builder

    def _order_controls(self, order: Order) -> ControlSetBuilder:
        bindings = {"id": order.id}
        builder = ControlSetBuilder()
        builder.add(self.document, ORDER, HttpMethod.GET, bindings)
        builder.add(self.document, ORDER, HttpMethod.PUT, bindings)
        if order.id > self.settings.deletion_floor:
            builder.add(self.document, ORDER, HttpMethod.DELETE, bindings)
        if order.customer_id is not None:
            builder.add(self.document, CUSTOMER, HttpMethod.GET, {"id": order.customer_id})
        builder.add(self.document, ORDERS, HttpMethod.GET)
        return builder
