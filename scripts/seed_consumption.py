"""
Seed Data Script for UsageLens Integration Testing.
Generates synthetic hourly consumption and pushes it to VictoriaMetrics.

Usage:
    python scripts/seed_consumption.py --entity meter-1 --days 30
    python scripts/seed_consumption.py --entity meter-2 --days 14 --spike-day 13
"""
import argparse
import asyncio
import math
import random
import time

import httpx

VM_URL = "http://localhost:8428"
METRIC_NAME = "consumption"


def generate_lines(entity: str, days: int, spike_day: int | None, growth: float) -> list[str]:
    """
    Hourly readings with a daily cycle, slow growth and an optional spike day.
    """
    lines = []
    now = int(time.time())
    start_time = now - days * 86400

    for i in range(days * 24):
        t = start_time + i * 3600
        day = i // 24

        # Daily cycle: low at night, peak in the evening
        val = 0.5 + 0.3 * math.sin((i % 24 - 6) / 24 * 2 * math.pi)
        val += growth * day
        val += random.uniform(-0.05, 0.05)

        if spike_day is not None and day == spike_day:
            val *= 4  # SPIKE

        # Prometheus text format: metric_name{label="val"} value timestamp_ms
        lines.append(f'{METRIC_NAME}{{entity="{entity}"}} {max(val, 0.0):.3f} {t * 1000}')
    return lines


async def seed(entity: str, days: int, spike_day: int | None, growth: float, url: str):
    print(f"Seeding {METRIC_NAME}{{entity=\"{entity}\"}}: {days} days of hourly readings...")
    payload = "\n".join(generate_lines(entity, days, spike_day, growth))

    async with httpx.AsyncClient() as client:
        # VictoriaMetrics allows import via /api/v1/import/prometheus
        import_url = f"{url}/api/v1/import/prometheus"
        print(f"Pushing to {import_url}...")

        response = await client.post(import_url, content=payload)

        if response.status_code == 204:
            print("Successfully seeded data.")
        else:
            print(f"Failed to seed: {response.status_code} {response.text}")


def main():
    parser = argparse.ArgumentParser(description="Seed synthetic consumption into VictoriaMetrics")
    parser.add_argument("--entity", default="meter-1")
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--spike-day", type=int, default=None, help="Day index whose readings are multiplied by 4")
    parser.add_argument("--growth", type=float, default=0.01, help="Per-hour increase added each day")
    parser.add_argument("--url", default=VM_URL)
    args = parser.parse_args()

    asyncio.run(seed(args.entity, args.days, args.spike_day, args.growth, args.url))


if __name__ == "__main__":
    main()
