"""
Unit tests for PrintifyClient mockup creation.
"""
import json
import pytest
import httpx
import respx

from product_sync.errors import UpstreamRequestError
from product_sync.services.printify_client import PrintifyClient, PRINTIFY_API_BASE

UPLOAD_URL = f"{PRINTIFY_API_BASE}/uploads/images.json"
PRODUCTS_URL = f"{PRINTIFY_API_BASE}/shops/test_shop_123/products.json"


@pytest.mark.unit
class TestPrintifyClient:
    """Tests for PrintifyClient API integration."""

    def test_client_initialization(self, printify_client):
        assert printify_client.shop_id == "test_shop_123"
        assert printify_client.headers["Authorization"] == "Bearer test_printify_token"
        assert printify_client.configured

    def test_unconfigured_client_produces_no_mockup(self):
        client = PrintifyClient(api_token=None)

        with respx.mock(assert_all_called=False) as router:
            assert client.create_mockup("Tee", "desc", "https://img/design.png") is None
            assert not router.calls

    @respx.mock
    def test_upload_image_by_url(self, printify_client):
        route = respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json={"id": "img_abc123"}))

        result = printify_client.upload_image_by_url(url="https://example.com/design.png", file_name="design.png")

        assert result["id"] == "img_abc123"
        assert json.loads(route.calls.last.request.content) == {
            "file_name": "design.png", "url": "https://example.com/design.png",
        }

    @respx.mock
    def test_resolve_shop_id_from_first_shop(self):
        client = PrintifyClient(api_token="t")
        respx.get(f"{PRINTIFY_API_BASE}/shops.json").mock(
            return_value=httpx.Response(200, json=[{"id": 777, "title": "Main"}, {"id": 888}])
        )

        assert client.resolve_shop_id() == "777"

    @respx.mock
    def test_create_mockup_success(self, printify_client):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json={"id": "img_1"}))
        create = respx.post(PRODUCTS_URL).mock(return_value=httpx.Response(200, json={
            "id": "prod_1",
            "images": [{"src": "https://images.printify.com/mockup-front.png"}, {"src": "https://x/back.png"}],
        }))

        url = printify_client.create_mockup("Speed Tee", "<p>fast</p>", "https://img/design.png")

        assert url == "https://images.printify.com/mockup-front.png"
        spec = json.loads(create.calls.last.request.content)
        assert spec["blueprint_id"] == 6
        assert spec["print_provider_id"] == 1
        assert spec["variants"] == [{"id": 4012, "price": 1999, "is_enabled": True}]
        assert spec["visible"] is False
        placeholder = spec["print_areas"][0]["placeholders"][0]
        assert placeholder["position"] == "front"
        assert placeholder["images"][0]["id"] == "img_1"

    @respx.mock
    def test_create_mockup_api_error_returns_none(self, printify_client):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json={"id": "img_1"}))
        respx.post(PRODUCTS_URL).mock(return_value=httpx.Response(400, json={"errors": {"reason": "bad"}}))

        assert printify_client.create_mockup("Tee", "", "https://img/design.png") is None

    @respx.mock
    def test_create_mockup_without_images_returns_none(self, printify_client):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json={"id": "img_1"}))
        respx.post(PRODUCTS_URL).mock(return_value=httpx.Response(200, json={"id": "prod_1", "images": []}))

        assert printify_client.create_mockup("Tee", "", "https://img/design.png") is None

    @respx.mock
    def test_create_mockup_no_shop_returns_none(self):
        client = PrintifyClient(api_token="t")
        respx.get(f"{PRINTIFY_API_BASE}/shops.json").mock(return_value=httpx.Response(200, json=[]))

        assert client.create_mockup("Tee", "", "https://img/design.png") is None

    @respx.mock
    def test_request_errors_raise_upstream_error(self, printify_client):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(401, json={"error": "Unauthenticated"}))

        with pytest.raises(UpstreamRequestError) as exc:
            printify_client.upload_image_by_url(url="https://img/design.png")

        assert exc.value.status_code == 401

    @pytest.mark.parametrize("body", [[], "img_1", None])
    @respx.mock
    def test_create_mockup_unexpected_upload_body_returns_none(self, printify_client, body):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json=body))
        create = respx.post(PRODUCTS_URL)

        assert printify_client.create_mockup("Tee", "", "https://img/design.png") is None
        assert not create.called

    @pytest.mark.parametrize("body", [["prod_1"], {"id": "prod_1", "images": {"src": "x"}}])
    @respx.mock
    def test_create_mockup_unexpected_product_body_returns_none(self, printify_client, body):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, json={"id": "img_1"}))
        respx.post(PRODUCTS_URL).mock(return_value=httpx.Response(200, json=body))

        assert printify_client.create_mockup("Tee", "", "https://img/design.png") is None

    @respx.mock
    def test_create_mockup_non_json_body_returns_none(self, printify_client):
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(200, text="<html>gateway</html>"))

        assert printify_client.create_mockup("Tee", "", "https://img/design.png") is None

    @pytest.mark.parametrize("shops", [{"id": 1}, ["777"]])
    @respx.mock
    def test_create_mockup_unexpected_shops_body_returns_none(self, shops):
        client = PrintifyClient(api_token="t")
        respx.get(f"{PRINTIFY_API_BASE}/shops.json").mock(return_value=httpx.Response(200, json=shops))

        assert client.create_mockup("Tee", "", "https://img/design.png") is None
