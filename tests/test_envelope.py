from ohm_controls.app.domain import Customer
from ohm_controls.controls import OHM_MEDIA_TYPE, ControlSetBuilder, OhmResponse, resolve


class TestOhmResponse:
    def test_no_content(self):
        data = OhmResponse.no_content().to_dict()
        assert data["content"] is None
        assert data["controls"]["paths"] == {}

    def test_model_content_dumped(self):
        data = OhmResponse.of(Customer(id=1, name="Alice")).to_dict()
        assert data["content"] == {"id": 1, "name": "Alice"}

    def test_list_content_dumped(self):
        data = OhmResponse.of([Customer(id=1, name="Alice"), Customer(id=2, name="Bob")]).to_dict()
        assert [c["name"] for c in data["content"]] == ["Alice", "Bob"]

    def test_controls_materialized_from_builder(self, document):
        builder = ControlSetBuilder().insert(resolve(document, "/api/orders/{id}", "DELETE", {"id": 3}))
        data = OhmResponse.of({"id": 3}, builder).to_dict()
        assert list(data["controls"]["paths"]) == ["/api/orders/3"]
        assert "delete" in data["controls"]["paths"]["/api/orders/3"]

    def test_media_type(self):
        assert OHM_MEDIA_TYPE == "application/ohm+json"
