import asyncio
import logging
import sys

from gufo.pinger import Ping, ProbeExecutor, Resolver, Scheduler


async def main(addr: str) -> None:
    target = Resolver().resolve(addr)
    scheduler = Scheduler(target, ProbeExecutor(Ping()), interval=1.0)
    await scheduler.run(count=5)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(sys.argv[1]))
