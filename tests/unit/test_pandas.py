# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pandas as pd

from CloudML.AutoML import AutoMlClient
from CloudML.AutoML.core.operation import Operation
from CloudML.AutoML.models.model import Model
from CloudML.AutoML.utils._pandas import records_to_dataframe


class TestRecordsToDataFrame:
    def test_records_become_rows(self):
        df = records_to_dataframe(
            [
                Model(name="projects/p/locations/l/models/m1", display_name="a"),
                Model(name="projects/p/locations/l/models/m2", display_name="b", deployment_state="DEPLOYED"),
            ]
        )

        assert list(df["displayName"]) == ["a", "b"]
        assert pd.isna(df.loc[0, "deploymentState"])
        assert df.loc[1, "deploymentState"] == "DEPLOYED"

    def test_time_columns_parsed(self):
        df = records_to_dataframe([{"name": "x", "createTime": "2024-05-01T12:00:00Z", "updateTime": "bogus"}])

        assert df.loc[0, "createTime"] == pd.Timestamp("2024-05-01T12:00:00Z")
        assert pd.isna(df.loc[0, "updateTime"])

    def test_operation_handles_use_raw_record(self, fake_transport):
        op = Operation(fake_transport, {"name": "op-1", "done": True})

        df = records_to_dataframe([op])

        assert df.loc[0, "name"] == "op-1"
        assert bool(df.loc[0, "done"]) is True

    def test_empty(self):
        df = records_to_dataframe([])
        assert isinstance(df, pd.DataFrame)
        assert df.empty


def test_pager_to_dataframe(fake_transport, location):
    fake_transport.reply(
        "ListModels",
        {"model": [{"name": f"{location}/models/m1", "createTime": "2024-01-01T00:00:00Z"}], "nextPageToken": "t"},
        {"model": [{"name": f"{location}/models/m2", "createTime": "2024-02-01T00:00:00Z"}]},
    )
    client = AutoMlClient(transport=fake_transport)

    df = client.models.list(location).to_dataframe()

    assert len(df) == 2
    assert str(df["createTime"].dt.tz) == "UTC"
    assert fake_transport.count("ListModels") == 2
