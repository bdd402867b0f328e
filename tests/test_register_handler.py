"""
Registration form tests, driven through injected input/output.
"""

import pytest

from handlers import register_handler
from handlers.register_handler import RegisterForm
from models.user import Gender
from security import passwords
from services import agent_service
from services.agent_service import AgentService


@pytest.fixture(autouse=True)
def _fast_hashing(monkeypatch):
    monkeypatch.setattr(
        agent_service, "hash_password", lambda p: passwords.hash_password(p, rounds=4)
    )


def _fields(**overrides):
    fields = {
        "CNIE: ": "JK4411",
        "First name: ": "Meryem",
        "Last name: ": "Tahiri",
        "Birthday (YYYY-MM-DD): ": "1991-11-02",
        "Gender (MALE/FEMALE): ": "female",
        "Email: ": "m.tahiri@cnss.ma",
        "Phone: ": "0677001122",
    }
    fields.update(overrides)
    return fields


def _form(service, fields, password="pass-1", confirm=None):
    out = []
    secrets = iter([password, password if confirm is None else confirm])
    form = RegisterForm(
        service,
        input_func=lambda prompt: fields[prompt],
        password_func=lambda prompt: next(secrets),
        output=out.append,
    )
    return form, out


class TestRegisterForm:

    def test_registers_agent(self, conn):
        service = AgentService(conn)
        form, out = _form(service, _fields())
        agent = form.run()

        assert agent is not None
        assert agent.gender is Gender.FEMALE
        assert service.sign_in("m.tahiri@cnss.ma", "pass-1").agent_cns_id == agent.agent_cns_id
        assert out[-1].startswith("Registered #")

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"Birthday (YYYY-MM-DD): ": "02/11/1991"}, "Invalid birthday: '02/11/1991'"),
            ({"Gender (MALE/FEMALE): ": "x"}, "Invalid gender: 'X'"),
            ({"Email: ": ""}, "CNIE, names and email are required."),
        ],
    )
    def test_rejects_invalid_input(self, conn, overrides, message):
        form, out = _form(AgentService(conn), _fields(**overrides))
        assert form.run() is None
        assert out == [message]
        assert conn.count() == 0

    def test_password_mismatch(self, conn):
        form, out = _form(AgentService(conn), _fields(), confirm="other")
        assert form.run() is None
        assert out == ["Passwords do not match."]

    def test_refused_registration_is_reported(self, conn):
        service = AgentService(conn)
        _form(service, _fields())[0].run()
        form, out = _form(service, _fields(**{"CNIE: ": "OTHER1"}))
        assert form.run() is None
        assert out[-1].startswith("Registration refused")

    def test_duplicate_cnie_is_reported(self, conn):
        service = AgentService(conn)
        _form(service, _fields())[0].run()
        form, out = _form(service, _fields(**{"Email: ": "other@cnss.ma"}))
        assert form.run() is None
        assert out == ["An agent with this CNIE already exists."]
        assert conn.count() == 1

    def test_end_of_input_cancels(self, conn):
        def no_input(prompt):
            raise EOFError

        form = RegisterForm(AgentService(conn), input_func=no_input, output=lambda s: None)
        assert form.run() is None


class TestRegisterCommand:

    def test_main_creates_schema_and_registers(self, conn, monkeypatch):
        from contextlib import contextmanager

        from db import connection as db_connection
        from db import init_db

        @contextmanager
        def fake_connection():
            yield conn

        schema_conns = []
        forms = []

        class RecordingForm:
            def __init__(self, service):
                forms.append(service)

            def run(self):
                return None

        monkeypatch.setattr(db_connection, "connection", fake_connection)
        monkeypatch.setattr(init_db, "create_tables", schema_conns.append)
        monkeypatch.setattr(register_handler, "RegisterForm", RecordingForm)

        register_handler.main()

        assert schema_conns == [conn]
        assert forms[0].conn is conn
