import pytest
import requests

import vendors.directory as directory_module
from routing.distance import Coordinate
from routing.eta_service import VendorDeliveryProfile
from vendors.directory import DirectoryUnavailableError, HttpVendorDirectory, safe_lookup


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeBackend:
    """
    Records every POST and answers per query path.
    """
    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def __call__(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        answer = self.answers[json["path"]]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, FakeResponse):
            return answer
        return FakeResponse({"status": "success", "value": answer})


@pytest.fixture
def backend(monkeypatch):
    def install(answers):
        fake = FakeBackend(answers)
        monkeypatch.setattr(directory_module.requests, "post", fake)
        return fake
    return install


@pytest.fixture
def client():
    return HttpVendorDirectory(base_url="https://shops.example.com/", timeout=2)


def test_list_active_vendors(backend, client):
    fake = backend({
        "shops:searchShops": [
            {"_id": "s1", "name": "Corner Store", "address": {"coordinates": {"lat": 28.63, "lng": 77.21}},
             "rating": 4.2, "is_active": True},
            {"_id": "s2", "name": "No Location", "address": {"city": "Delhi"}},
        ],
    })

    vendors = client.list_active_vendors()

    assert [vendor.id for vendor in vendors] == ["s1", "s2"]
    assert vendors[0].coordinates == Coordinate(28.63, 77.21)
    assert vendors[1].coordinates is None

    call = fake.calls[0]
    assert call["url"] == "https://shops.example.com/api/query"
    assert call["json"] == {
        "path": "shops:searchShops",
        "args": {"query": "", "is_active": True, "limit": 1000},
        "format": "json",
    }
    assert call["timeout"] == 2


def test_malformed_documents_are_skipped(backend, client):
    backend({"shops:searchShops": [{"name": "no id"}, {"_id": "ok", "name": "Fine"}]})

    assert [vendor.id for vendor in client.list_active_vendors()] == ["ok"]


def test_empty_listing(backend, client):
    backend({"shops:searchShops": None})
    assert client.list_active_vendors() == []


def test_error_envelope_raises(backend, client):
    backend({"shops:searchShops": FakeResponse({"status": "error", "errorMessage": "Server Error"})})

    with pytest.raises(DirectoryUnavailableError, match="Server Error"):
        client.list_active_vendors()


def test_http_error_raises(backend, client):
    backend({"shops:searchShops": FakeResponse({}, status_code=502)})

    with pytest.raises(DirectoryUnavailableError):
        client.list_active_vendors()


def test_transport_error_raises(backend, client):
    backend({"shops:searchShops": requests.exceptions.ConnectTimeout("timed out")})

    with pytest.raises(DirectoryUnavailableError, match="timed out"):
        client.list_active_vendors()


def test_invalid_json_raises(backend, client):
    backend({"shops:searchShops": FakeResponse(ValueError("not json"))})

    with pytest.raises(DirectoryUnavailableError):
        client.list_active_vendors()


def test_delivery_profile_present(backend, client):
    fake = backend({
        "shops:getShop": {
            "_id": "s1",
            "delivery_profile": {"basePrepMinutes": 7, "maxParallelOrders": 4, "bufferMinutes": 3, "avgRiderSpeedKmph": 18},
        },
    })

    assert client.get_delivery_profile("s1") == VendorDeliveryProfile(7, 4, 3, 18)
    assert fake.calls[0]["json"]["args"] == {"id": "s1"}


@pytest.mark.parametrize("document", [None, {"_id": "s1"}, {"_id": "s1", "delivery_profile": None}])
def test_delivery_profile_absent(backend, client, document):
    backend({"shops:getShop": document})
    assert client.get_delivery_profile("s1") is None


def test_count_pending_orders(backend, client):
    fake = backend({"orders:getOrdersByShop": [{"_id": "o1"}, {"_id": "o2"}, {"_id": "o3"}]})

    assert client.count_pending_orders("s1") == 3
    assert fake.calls[0]["json"]["args"] == {"shop_id": "s1", "status": "pending"}


def test_count_pending_orders_empty(backend, client):
    backend({"orders:getOrdersByShop": None})
    assert client.count_pending_orders("s1") == 0


@pytest.mark.parametrize("value", [{"page": [], "total": 3}, "pending", 7])
def test_count_pending_orders_rejects_non_list(backend, client, value):
    backend({"orders:getOrdersByShop": value})

    with pytest.raises(DirectoryUnavailableError):
        client.count_pending_orders("s1")


def test_base_url_is_required(monkeypatch):
    monkeypatch.setattr(directory_module, "BASE_URL", None)

    with pytest.raises(ValueError):
        HttpVendorDirectory()


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setattr(directory_module, "BASE_URL", "https://env.example.com")
    assert HttpVendorDirectory().base_url == "https://env.example.com"


def test_safe_lookup_success_and_failure():
    ok = safe_lookup(lambda: 4, 0)
    assert ok.ok and ok.value == 4

    def boom():
        raise RuntimeError("nope")

    failed = safe_lookup(boom, 0)
    assert not failed.ok
    assert failed.value == 0
    assert isinstance(failed.error, RuntimeError)
