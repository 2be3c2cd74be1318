# tests/test_client_tools.py
import cli
from sdk.protection import ProtectionClient

def test_client_sends_no_auth_header():
    c = ProtectionClient(base_url="http://127.0.0.1:3000/")
    assert c.base_url == "http://127.0.0.1:3000"
    assert "Authorization" not in c.session.headers

def test_ask_subtotal_reprompts_until_valid(monkeypatch):
    answers = iter(["-5", "abc", "inf", "1e400", "42.5"])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(answers))
    assert cli.ask_subtotal("Order subtotal") == 42.5
