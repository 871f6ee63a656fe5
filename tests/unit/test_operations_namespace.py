# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for the ``client.operations`` namespace."""

import pytest

from CloudML.AutoML import AutoMlClient, CallOptions, Operation
from CloudML.AutoML.core.errors import ValidationError
from CloudML.AutoML.models.dataset import Dataset

OPERATION = "projects/p/locations/us-central1/operations/op-7"


@pytest.fixture
def client(fake_transport, fast_config):
    return AutoMlClient(transport=fake_transport, config=fast_config)


def test_get_returns_handle_with_raw_result(client, fake_transport):
    fake_transport.reply("GetOperation", {"name": OPERATION, "done": True, "response": {"name": "ds-9"}})

    op = client.operations.get(OPERATION)

    assert isinstance(op, Operation)
    assert op.done
    assert op.result() == {"name": "ds-9"}
    assert fake_transport.count("GetOperation") == 1


def test_get_with_decoder(client, fake_transport):
    fake_transport.reply("GetOperation", {"name": OPERATION, "done": True, "response": {"name": "ds-9"}})

    op = client.operations.get(OPERATION, Dataset.from_api_response)

    assert op.result().dataset_id == "ds-9"


def test_get_validates_name(client, fake_transport):
    with pytest.raises(ValidationError):
        client.operations.get("op-7")
    assert fake_transport.calls == []


def test_cancel_and_delete(client, fake_transport):
    fake_transport.reply("CancelOperation", {})
    fake_transport.reply("DeleteOperation", {})

    client.operations.cancel(OPERATION)
    client.operations.delete(OPERATION)

    assert fake_transport.methods() == ["CancelOperation", "DeleteOperation"]
    assert fake_transport.calls[0][1] == {"name": OPERATION}


def test_list_yields_operation_handles(client, fake_transport, location):
    fake_transport.reply(
        "ListOperations",
        {"operations": [{"name": f"{location}/operations/a", "done": True}], "nextPageToken": "p2"},
        {"operations": [{"name": f"{location}/operations/b"}]},
    )

    ops = list(client.operations.list(location, filter="done=true"))

    assert [op.name.rsplit("/", 1)[-1] for op in ops] == ["a", "b"]
    assert [op.done for op in ops] == [True, False]
    assert fake_transport.calls[0][1] == {"name": location, "filter": "done=true"}
    assert fake_transport.calls[1][1]["pageToken"] == "p2"


def test_listed_handles_poll_with_list_options(client, fake_transport):
    options = CallOptions(metadata={"x-trace": "1"})
    fake_transport.reply("ListOperations", {"operations": [{"name": OPERATION}]})
    fake_transport.reply("GetOperation", {"name": OPERATION, "done": True})

    (op,) = list(client.operations.list("projects/p/locations/us-central1", options=options))
    op.poll()

    assert fake_transport.calls[-1] == ("GetOperation", {"name": OPERATION}, options)
