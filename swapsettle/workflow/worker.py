"""Worker configuration for the swap settlement workflow.

Usage::

    import asyncio
    from swapsettle.workflow.worker import run_worker

    asyncio.run(run_worker())
"""

from __future__ import annotations

from temporalio.client import Client
from temporalio.worker import Worker

from swapsettle.infra.config import TASK_QUEUE
from swapsettle.workflow.activities import evaluate_settlement
from swapsettle.workflow.settlement_workflow import SwapSettlementWorkflow


def build_worker(client: Client, *, task_queue: str = TASK_QUEUE) -> Worker:
    return Worker(
        client,
        task_queue=task_queue,
        workflows=[SwapSettlementWorkflow],
        activities=[evaluate_settlement],
    )


async def run_worker(
    *,
    target_host: str = "localhost:7233",
    namespace: str = "default",
    task_queue: str = TASK_QUEUE,
) -> None:
    """Connect to Temporal and run the worker until interrupted."""
    client = await Client.connect(target_host, namespace=namespace)
    await build_worker(client, task_queue=task_queue).run()
