import pytest

from services.pricing.domain import ResourceType, RoomServiceCart
from services.shared.domain import Money


@pytest.fixture
def menu(create_catalog_entry):
    return {
        "tibs": create_catalog_entry(
            resource_type=ResourceType.ROOM_SERVICE, entry_id="tibs", name="Tibs", price=150
        ),
        "kitfo": create_catalog_entry(
            resource_type=ResourceType.ROOM_SERVICE, entry_id="kitfo", name="Kitfo", price=300
        ),
    }


class TestRoomServiceCart:
    def test_empty_cart(self):
        cart = RoomServiceCart()
        assert cart.is_empty()
        assert cart.total() == Money.etb(0)

    def test_adding_same_item_merges_lines(self, menu):
        cart = RoomServiceCart().add(menu["tibs"]).add(menu["tibs"])
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2

    def test_total_recomputes_after_removal(self, menu):
        cart = RoomServiceCart().add(menu["tibs"], 2).add(menu["kitfo"], 1)
        assert cart.total() == Money.etb(600)

        cart = cart.remove("kitfo")

        assert cart.total() == Money.etb(300)
        assert cart.item_count() == 2

    def test_quantity_never_goes_below_zero(self, menu):
        cart = RoomServiceCart().add(menu["tibs"], 1)

        cart = cart.update_quantity("tibs", -5)

        assert cart.is_empty()
        assert cart.total() == Money.etb(0)

    def test_operations_do_not_mutate_original(self, menu):
        original = RoomServiceCart().add(menu["tibs"], 1)
        original.update_quantity("tibs", 3)
        assert original.item_count() == 1

    def test_add_requires_positive_quantity(self, menu):
        with pytest.raises(ValueError):
            RoomServiceCart().add(menu["tibs"], 0)

    def test_line_snapshot(self, menu):
        line = RoomServiceCart().add(menu["kitfo"], 2).lines[0]
        assert line.to_dict() == {"id": "kitfo", "name": "Kitfo", "price": "300.00", "quantity": 2}
