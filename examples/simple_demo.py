#!/usr/bin/env python3
"""
Simple demo of redislogger.

Records a few entries into a local Redis, then lists groups, pages
through one group and intersects two.

Requires a Redis server at localhost:6379 (or set REDIS_SERVER).
"""

import time

from redislogger import RedisLogger
from redislogger.utils.config import Config
from redislogger.utils.logging import configure_logging_from_config


def main():
    print("=" * 60)
    print("redislogger - Simple Record/Browse Demo")
    print("=" * 60)

    config = Config()
    config.set("logging.format", "console")
    configure_logging_from_config(config)

    # Separate seconds keep the entries apart with the coarse id strategy
    print("\n[1] Recording entries...")
    log = RedisLogger.from_config(config)
    log.error({"msg": "connection refused", "host": "db-1"}, ["db"])
    time.sleep(1)
    log.warn({"msg": "slow query", "ms": 1840}, ["db"])
    time.sleep(1)
    log.error({"msg": "cache miss storm"}, ["cache"])
    print("✅ Recorded 3 entries")

    print("\n[2] Groups:")
    for name, count in sorted(log.groups().items()):
        print(f"  {name}: {count}")

    print("\n[3] Newest errors:")
    for entry in log.entries("error", page_size=10):
        print(f"  {entry}")

    print("\n[4] Errors in db:")
    for entry in log.intersect(["error", "db"]):
        print(f"  {entry}")

    print("\n" + "=" * 60)
    print("Demo completed successfully!")
    print("=" * 60)


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nDemo interrupted by user")
    except Exception as e:
        print(f"\n❌ Demo failed: {e}")
        import traceback
        traceback.print_exc()
