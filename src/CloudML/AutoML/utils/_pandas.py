# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

_TIME_COLUMNS = ("createTime", "updateTime")


def _as_row(record: Any) -> Dict[str, Any]:
    if hasattr(record, "to_dict"):
        return record.to_dict()
    raw = getattr(record, "raw", None)
    if isinstance(raw, dict):
        return dict(raw)
    return dict(record)


def records_to_dataframe(records: Iterable[Any]) -> pd.DataFrame:
    """Build a DataFrame with one row per record, in iteration order.

    Records are converted with ``to_dict()`` (wire field names as columns);
    operation handles contribute their raw record. RFC 3339 ``createTime`` and
    ``updateTime`` columns are parsed into UTC timestamps.

    :param records: Entity records, operation handles or plain dicts.
    """
    rows: List[Dict[str, Any]] = [_as_row(r) for r in records]
    df = pd.DataFrame(rows)
    for column in _TIME_COLUMNS:
        if column in df.columns:
            df[column] = pd.to_datetime(df[column], utc=True, errors="coerce")
    return df
