from datetime import date
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from microdiary.api_service.api_v1.endpoints.entries import (
    get_all_entries,
    get_entries_for_date,
    get_entry_by_id,
)


def scalars_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


@pytest.mark.asyncio
async def test_get_entries_for_date_filters_and_orders(mock_db_session, make_db_entry):
    rows = [make_db_entry()]
    mock_db_session.execute.return_value = scalars_result(rows)
    entries = await get_entries_for_date(mock_db_session, date(2024, 1, 15))
    assert entries == rows
    statement = str(mock_db_session.execute.await_args.args[0])
    assert "WHERE diary_entries." in statement
    assert "ORDER BY diary_entries.start_time" in statement

@pytest.mark.asyncio
async def test_get_all_entries_orders_by_date_then_start(mock_db_session):
    mock_db_session.execute.return_value = scalars_result([])
    assert await get_all_entries(mock_db_session) == []
    statement = str(mock_db_session.execute.await_args.args[0])
    assert statement.index("ORDER BY") < statement.rindex("start_time")

@pytest.mark.asyncio
async def test_get_entry_by_id_missing(mock_db_session):
    with pytest.raises(HTTPException) as exc_info:
        await get_entry_by_id(mock_db_session, "00000000-0000-0000-0000-000000000009")
    assert exc_info.value.status_code == 404
