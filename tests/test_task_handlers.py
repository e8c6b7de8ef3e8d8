"""Tests for the session event handlers: the whole flow from user action to table."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import httpx
import pytest

from services import task_handlers
from services.data_model import NotificationLevel, Table
from services.session import SessionContext

from conftest import TEST_API_KEY, completion_body

PRIOR_TABLE = Table(columns=["name"], rows=[{"name": "Earlier"}])


def reply_with(content: str):
    return lambda request: httpx.Response(200, json=completion_body(content))


class TestSaveApiKey:

    def test_empty_key_is_rejected(self):
        ctx = SessionContext()
        notification = task_handlers.handle_save_api_key(ctx, "  ")
        assert notification.level == NotificationLevel.WARNING
        assert ctx.credential is None

    def test_key_is_stored_and_masked_in_debug(self):
        ctx = SessionContext()
        notification = task_handlers.handle_save_api_key(ctx, TEST_API_KEY)
        assert notification.text == "API Key Added"
        assert ctx.credential == TEST_API_KEY
        assert TEST_API_KEY not in ctx.debug.current
        assert ctx.debug.current.endswith(TEST_API_KEY[-4:])


class TestFieldActions:

    def test_change_fields_replaces_selection_and_extends_options(self):
        ctx = SessionContext()
        task_handlers.dispatch("change_fields", ctx, names=["a", "a", "b"])
        assert ctx.registry.names == ["a", "b"]
        assert ctx.field_options == ["a", "b"]

    def test_clear_fields(self, ctx):
        task_handlers.dispatch("clear_fields", ctx)
        assert ctx.registry.names == []

    def test_upload_replaces_selection(self, ctx):
        notification = task_handlers.dispatch(
            "upload_file", ctx, file_name="people.csv", data=b"email,signup_date\nx@y.z,2024-01-01\n"
        )
        assert notification.level == NotificationLevel.MESSAGE
        assert ctx.registry.names == ["email", "signup_date"]
        assert ctx.field_options == ["email", "signup_date"]

    def test_unsupported_upload_leaves_registry_unchanged(self, ctx):
        notification = task_handlers.dispatch("upload_file", ctx, file_name="notes.txt", data=b"name,age\n")
        assert notification.level == NotificationLevel.ERROR
        assert ctx.registry.names == ["name", "age"]

    def test_malformed_upload_leaves_registry_unchanged(self, ctx):
        task_handlers.dispatch("upload_file", ctx, file_name="broken.xlsx", data=b"not a workbook")
        assert ctx.registry.names == ["name", "age"]


class TestValidation:

    def test_missing_key_blocks_request(self, ctx, make_client):
        ctx.credential = None
        client, transport = make_client(reply_with("name,age\nAda,30"))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)
        assert notification.level == NotificationLevel.WARNING
        assert transport.requests == []

    def test_empty_fields_block_request(self, ctx, make_client):
        ctx.registry.clear()
        client, transport = make_client(reply_with("name,age\nAda,30"))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)
        assert notification.level == NotificationLevel.WARNING
        assert transport.requests == []

    @pytest.mark.parametrize("row_count", [0, -3, 2.5, None, "many"])
    def test_bad_row_count_blocks_request(self, ctx, make_client, row_count):
        client, transport = make_client(reply_with("name,age\nAda,30"))
        notification = task_handlers.handle_generate_data(ctx, row_count=row_count, client=client)
        assert notification.level == NotificationLevel.WARNING
        assert transport.requests == []

    def test_whole_float_row_count_is_accepted(self, ctx, make_client):
        client, transport = make_client(reply_with("name,age\nAda,30"))
        notification = task_handlers.handle_generate_data(ctx, row_count=3.0, client=client)
        assert notification.level == NotificationLevel.MESSAGE
        assert "Generate 3 rows of data." in transport.last_json()["messages"][1]["content"]

    def test_request_in_flight_blocks_second_request(self, ctx, make_client):
        ctx.in_flight = True
        client, transport = make_client(reply_with("name,age\nAda,30"))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)
        assert notification.level == NotificationLevel.WARNING
        assert transport.requests == []


class TestGenerate:

    def test_success_sets_table(self, ctx, make_client):
        client, transport = make_client(reply_with("name,age\nAda,30\nGrace,33"))
        notification = task_handlers.handle_generate_data(ctx, row_count=2, description="", client=client)

        assert notification.level == NotificationLevel.MESSAGE
        assert ctx.table.columns == ["name", "age"]
        assert len(ctx.table.rows) == 2
        assert ctx.in_flight is False
        assert "Generate 2 rows of data." in transport.last_json()["messages"][1]["content"]

    def test_debug_history_keeps_request_body(self, ctx, make_client):
        client, _ = make_client(reply_with("name,age\nAda,30"))
        task_handlers.handle_generate_data(ctx, row_count=1, client=client)

        messages = [entry["message"] for entry in ctx.debug.get_history()]
        assert ctx.debug.current == "API request successful. Data rendered as a table."
        assert any(m.startswith("Request Body:") for m in messages)
        assert any(m.startswith("HTTP status: Success") for m in messages)
        assert all(TEST_API_KEY not in m for m in messages)

    def test_unauthorized_keeps_prior_table(self, ctx, make_client):
        ctx.table = PRIOR_TABLE
        client, _ = make_client(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)

        assert notification.level == NotificationLevel.WARNING
        assert ctx.table is PRIOR_TABLE
        assert "Client error" in ctx.debug.current
        assert "bad key" in ctx.debug.current

    def test_transport_error_keeps_prior_table(self, ctx, make_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        ctx.table = PRIOR_TABLE
        client, _ = make_client(refuse)
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)

        assert notification.level == NotificationLevel.ERROR
        assert ctx.table is PRIOR_TABLE
        assert ctx.debug.current.startswith("Error in API request:")
        assert ctx.in_flight is False

    def test_non_json_body(self, ctx, make_client):
        ctx.table = PRIOR_TABLE
        client, _ = make_client(lambda request: httpx.Response(200, text="oops"))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)
        assert notification.level == NotificationLevel.ERROR
        assert ctx.table is PRIOR_TABLE

    def test_empty_choices(self, ctx, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={"choices": []}))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)
        assert notification.level == NotificationLevel.WARNING
        assert "no valid 'choices'" in ctx.debug.current
        assert ctx.table is None

    def test_csv_arity_error_keeps_prior_table(self, ctx, make_client):
        ctx.table = PRIOR_TABLE
        client, _ = make_client(reply_with("name,age\nAda,30,extra"))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)

        assert notification.level == NotificationLevel.ERROR
        assert ctx.table is PRIOR_TABLE
        assert ctx.debug.current.startswith("Error during CSV parsing:")

    def test_csv_quoting_warning_keeps_prior_table(self, ctx, make_client):
        ctx.table = PRIOR_TABLE
        client, _ = make_client(reply_with('name,age\n"Ada,30'))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)

        assert notification.level == NotificationLevel.WARNING
        assert ctx.table is PRIOR_TABLE
        assert ctx.debug.current.startswith("Warning during CSV parsing:")

    def test_csv_duplicate_header_keeps_prior_table(self, ctx, make_client):
        ctx.table = PRIOR_TABLE
        client, _ = make_client(reply_with("name,name\nAda,Lovelace"))
        notification = task_handlers.handle_generate_data(ctx, row_count=5, client=client)

        assert notification.level == NotificationLevel.ERROR
        assert ctx.table is PRIOR_TABLE
        assert ctx.debug.current.startswith("Error during CSV parsing:")


class TestDispatch:

    def test_notifications_are_queued(self, ctx):
        task_handlers.dispatch("save_api_key", ctx, api_key="")
        queued = ctx.pop_notifications()
        assert [n.level for n in queued] == [NotificationLevel.WARNING]
        assert ctx.pop_notifications() == []

    def test_clear_debug_empties_channel(self, ctx):
        ctx.debug.write("Request Body: {}")
        assert task_handlers.dispatch("clear_debug", ctx) is None
        assert ctx.debug.current == ""
        assert ctx.debug.get_history() == []

    def test_unknown_action(self, ctx):
        with pytest.raises(ValueError):
            task_handlers.dispatch("set_theme", ctx)
