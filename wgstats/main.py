from dotenv import load_dotenv

load_dotenv()

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI

from wgstats.core.config import settings
from wgstats.routers import auth, wg
from wgstats.services.command import CommandFailure
from wgstats.services.stats.collector import WireguardCollector
from wgstats.services.stats.stats import collect_once, store

logger = logging.getLogger(__name__)


async def collector_loop(collector: WireguardCollector):
    while True:
        try:
            await asyncio.to_thread(collect_once, collector, store)
        except CommandFailure as e:
            logger.error("Collector error: %s", e)
        except Exception:
            logger.exception("Collector crashed, retrying next cycle")
        await asyncio.sleep(settings.COLLECT_INTERVAL)  # интервал сбора


@asynccontextmanager
async def lifespan(app: FastAPI):
    collector = WireguardCollector.from_settings(settings)
    task = asyncio.create_task(collector_loop(collector))
    app.state.collector_task = task
    yield
    task.cancel()
    with suppress(asyncio.CancelledError):
        await task


app = FastAPI(title="WireGuard Stats API", lifespan=lifespan)
app.include_router(wg.router, prefix="/api/wg")
app.include_router(auth.router, prefix="/api/auth")
