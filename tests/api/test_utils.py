from types import SimpleNamespace

from app.api import utils


def test_envelope():
    body = utils.envelope([1, 2], chartType="usage-bar")
    assert body["success"] is True
    assert body["data"] == [1, 2]
    assert body["chartType"] == "usage-bar"
    assert body["timestamp"].tzinfo is not None


def test_counted_envelope():
    assert utils.counted_envelope(["a", "b", "c"])["count"] == 3


def test_error_body():
    assert utils.error_body("Boom") == {"success": False, "error": "Boom"}
    assert utils.error_body("Boom", "detail", provided="x") == {
        "success": False,
        "error": "Boom",
        "message": "detail",
        "provided": "x",
    }


def test_get_client_ip_ignores_forwarded_for_from_untrusted_peer():
    request = SimpleNamespace(headers={"X-Forwarded-For": "10.0.0.1"}, client=SimpleNamespace(host="1.1.1.1"))
    assert utils.get_client_ip(request) == "1.1.1.1"
    assert utils.get_client_ip(request, trusted_proxies=("2.2.2.2",)) == "1.1.1.1"


def test_get_client_ip_behind_trusted_proxy():
    request = SimpleNamespace(
        headers={"X-Forwarded-For": "6.6.6.6, 10.0.0.1, 2.2.2.3"},
        client=SimpleNamespace(host="2.2.2.2"),
    )
    # The leftmost hop is client-controlled; the rightmost untrusted hop is not
    assert utils.get_client_ip(request, trusted_proxies=("2.2.2.2", "2.2.2.3")) == "10.0.0.1"


def test_get_client_ip_all_hops_trusted():
    request = SimpleNamespace(headers={"X-Forwarded-For": "2.2.2.3"}, client=SimpleNamespace(host="2.2.2.2"))
    assert utils.get_client_ip(request, trusted_proxies=("2.2.2.2", "2.2.2.3")) == "2.2.2.3"


def test_get_client_ip_falls_back_to_client():
    request = SimpleNamespace(headers={}, client=SimpleNamespace(host="1.1.1.1"))
    assert utils.get_client_ip(request) == "1.1.1.1"
    assert utils.get_client_ip(SimpleNamespace(headers={}, client=None)) == "unknown"
