import asyncio
import json

import pytest

from conftest import (
    ANALYTICS_MARKER,
    INVENTORY_MARKER,
    PREDICTION_MARKER,
    ScriptedGenerator,
)
from gemini_insights import InsightBoard, InsightClient, run_insight_batch
from gemini_insights.batch import BATCH_ERROR_MESSAGE, LAST_SETTLED, LATEST_ISSUED
from gemini_insights.errors import TransportError


def test_batch_collects_all_three_categories(settings, sales, products):
    generator = ScriptedGenerator(
        {
            ANALYTICS_MARKER: json.dumps(
                {"summary": "ok", "recommendations": [], "trends": [], "alerts": []}
            ),
            INVENTORY_MARKER: TransportError("down", status_code=502),
            PREDICTION_MARKER: "Up 5%",
        }
    )
    client = InsightClient(settings, generator=generator)

    batch = asyncio.run(run_insight_batch(client, sales, products, sequence=3))

    assert batch.sequence == 3
    assert batch.analytics.is_live
    assert batch.inventory.is_fallback
    assert batch.prediction.value == "Up 5%"
    assert batch.degraded
    assert len(generator.prompts) == 3
    assert batch.to_dict()["inventory"]["source"] == "fallback"


def test_batch_calls_run_concurrently(settings, sales, products):
    started = []

    async def scenario():
        gate = asyncio.Event()

        async def generator(prompt):
            started.append(prompt)
            if len(started) == 3:
                gate.set()
            await gate.wait()
            return "text"

        client = InsightClient(settings, generator=generator)
        return await asyncio.wait_for(run_insight_batch(client, sales, products), timeout=5)

    batch = asyncio.run(scenario())

    # Every call had to be in flight at once for the gate to open.
    assert len(started) == 3
    assert batch.prediction.value == "text"


def _overlapping_refreshes(settings, sales, products, policy):
    async def scenario():
        gate = asyncio.Event()
        calls = []

        async def generator(prompt):
            calls.append(prompt)
            batch_number = (len(calls) - 1) // 3 + 1
            if batch_number == 1:
                await gate.wait()
            if PREDICTION_MARKER in prompt:
                return f"prediction from batch {batch_number}"
            raise TransportError("only predictions are scripted")

        board = InsightBoard(InsightClient(settings, generator=generator), policy=policy)
        first = asyncio.create_task(board.refresh(sales, products))
        while len(calls) < 3:
            await asyncio.sleep(0)

        await board.refresh(sales, products)
        shown_after_second = board.batch.prediction.value
        still_loading = board.loading

        gate.set()
        await first
        return board, shown_after_second, still_loading

    return asyncio.run(scenario())


def test_last_settled_policy_lets_slow_first_batch_win(settings, sales, products):
    board, shown_after_second, still_loading = _overlapping_refreshes(
        settings, sales, products, LAST_SETTLED
    )

    assert shown_after_second == "prediction from batch 2"
    assert still_loading
    assert board.batch.prediction.value == "prediction from batch 1"
    assert board.batch.sequence == 1
    assert not board.loading


def test_latest_issued_policy_drops_stale_batch(settings, sales, products):
    board, shown_after_second, _ = _overlapping_refreshes(
        settings, sales, products, LATEST_ISSUED
    )

    assert shown_after_second == "prediction from batch 2"
    assert board.batch.prediction.value == "prediction from batch 2"
    assert board.batch.sequence == 2
    assert board.issued == 2


def test_refresh_if_changed_tracks_input_identity(settings, sales, products):
    generator = ScriptedGenerator({PREDICTION_MARKER: "steady"})
    board = InsightBoard(InsightClient(settings, generator=generator))

    async def scenario():
        await board.refresh_if_changed(sales, products)
        await board.refresh_if_changed(sales, products)
        await board.refresh_if_changed(list(sales), products)
        await board.refresh(sales, products)

    asyncio.run(scenario())

    assert board.issued == 3
    assert len(generator.prompts) == 9


def test_malformed_input_sets_banner_instead_of_raising(settings, products):
    board = InsightBoard(InsightClient(settings, generator=ScriptedGenerator({})))

    result = asyncio.run(board.refresh(None, products))

    assert result is None
    assert board.batch is None
    assert board.error == BATCH_ERROR_MESSAGE
    assert not board.loading


def test_unknown_policy_is_rejected(settings):
    with pytest.raises(ValueError):
        InsightBoard(InsightClient(settings, generator=ScriptedGenerator({})), policy="random")


def test_latest_issued_ignores_older_batches_while_newest_is_pending(settings, sales, products):
    async def scenario():
        gates = {1: asyncio.Event(), 2: asyncio.Event(), 3: asyncio.Event()}
        calls = []

        async def generator(prompt):
            calls.append(prompt)
            batch_number = (len(calls) - 1) // 3 + 1
            await gates[batch_number].wait()
            if PREDICTION_MARKER in prompt:
                return f"prediction from batch {batch_number}"
            raise TransportError("only predictions are scripted")

        board = InsightBoard(InsightClient(settings, generator=generator))
        tasks = []
        for issued in (1, 2, 3):
            tasks.append(asyncio.create_task(board.refresh(sales, products)))
            while len(calls) < issued * 3:
                await asyncio.sleep(0)

        seen = []
        for number in (1, 2, 3):
            gates[number].set()
            await tasks[number - 1]
            seen.append(board.batch.prediction.value if board.batch else None)
        return board, seen

    board, seen = asyncio.run(scenario())

    assert seen == [None, None, "prediction from batch 3"]
    assert board.batch.sequence == 3
    assert board.error is None
