"""
Unit tests for the node JSON-RPC client.
"""

import pytest
import requests
from unittest.mock import Mock

from gxaccount.errors import RPCConnectionError, RPCError
from gxaccount.infra.rpc import NodeRPC


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def rpc(session):
    return NodeRPC("http://node.example.com/rpc", timeout=10, session=session)


def sent_payload(session):
    return session.post.call_args.kwargs["json"]


class TestCallShape:
    """Every method goes through call("database", ...)."""

    @pytest.mark.unit
    def test_get_account_by_name(self, rpc, session, response_factory):
        session.post.return_value = response_factory({"id": 1, "result": {"id": "1.2.17", "name": "alice"}})

        account = rpc.get_account_by_name("alice")

        assert account == {"id": "1.2.17", "name": "alice"}
        assert session.post.call_args.args == ("http://node.example.com/rpc",)
        assert session.post.call_args.kwargs["timeout"] == 10
        payload = sent_payload(session)
        assert payload["jsonrpc"] == "2.0"
        assert payload["method"] == "call"
        assert payload["params"] == ["database", "get_account_by_name", ["alice"]]

    @pytest.mark.unit
    def test_get_key_references(self, rpc, session, response_factory):
        session.post.return_value = response_factory({"id": 1, "result": [["1.2.17"]]})

        refs = rpc.get_key_references(["GXC6abc"])

        assert refs == [["1.2.17"]]
        assert sent_payload(session)["params"] == ["database", "get_key_references", [["GXC6abc"]]]

    @pytest.mark.unit
    def test_get_objects(self, rpc, session, response_factory):
        session.post.return_value = response_factory({"id": 1, "result": [{"id": "1.2.17"}, None]})

        objects = rpc.get_objects(["1.2.17", "1.2.99"])

        assert objects == [{"id": "1.2.17"}, None]
        assert sent_payload(session)["params"] == ["database", "get_objects", [["1.2.17", "1.2.99"]]]

    @pytest.mark.unit
    def test_unknown_account_is_none(self, rpc, session, response_factory):
        session.post.return_value = response_factory({"id": 1, "result": None})
        assert rpc.get_account_by_name("nobody") is None

    @pytest.mark.unit
    def test_request_ids_increase(self, rpc, session, response_factory):
        session.post.return_value = response_factory({"id": 1, "result": None})

        rpc.get_account_by_name("a")
        first = sent_payload(session)["id"]
        rpc.get_account_by_name("b")
        second = sent_payload(session)["id"]

        assert second == first + 1


class TestErrors:

    @pytest.mark.unit
    def test_rpc_error_member(self, rpc, session, response_factory):
        session.post.return_value = response_factory({
            "id": 1,
            "error": {"code": 1, "message": "Assert Exception", "data": {}}
        })

        with pytest.raises(RPCError) as exc:
            rpc.get_objects(["bad"])

        assert exc.value.method == "get_objects"
        assert exc.value.code == 1
        assert "Assert Exception" in str(exc.value)

    @pytest.mark.unit
    def test_string_error_member(self, rpc, session, response_factory):
        session.post.return_value = response_factory({"id": 1, "error": "boom"})

        with pytest.raises(RPCError, match="boom"):
            rpc.get_account_by_name("alice")

    @pytest.mark.unit
    def test_connection_error_is_chained(self, rpc, session):
        cause = requests.ConnectionError("refused")
        session.post.side_effect = cause

        with pytest.raises(RPCConnectionError) as exc:
            rpc.get_account_by_name("alice")

        assert exc.value.__cause__ is cause

    @pytest.mark.unit
    def test_http_error(self, rpc, session, response_factory):
        response = response_factory({}, status_code=502)
        response.raise_for_status.side_effect = requests.HTTPError("502 Bad Gateway")
        session.post.return_value = response

        with pytest.raises(RPCConnectionError, match="502"):
            rpc.get_account_by_name("alice")

    @pytest.mark.unit
    def test_non_json_response(self, rpc, session, response_factory):
        response = response_factory()
        response.json.side_effect = ValueError("Expecting value")
        session.post.return_value = response

        with pytest.raises(RPCConnectionError, match="not JSON"):
            rpc.get_account_by_name("alice")

    @pytest.mark.unit
    @pytest.mark.parametrize("reply", [[1], None, "ok"])
    def test_reply_not_an_object(self, rpc, session, response_factory, reply):
        session.post.return_value = response_factory(reply)

        with pytest.raises(RPCConnectionError, match="not a JSON object"):
            rpc.get_account_by_name("alice")
