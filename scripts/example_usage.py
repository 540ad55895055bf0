#!/usr/bin/env python3
"""
Example usage of the libraildriver module

This script demonstrates:
- Locating the RailDriver DLL from config/raildriver.yaml
- Reading the speedometer and throttle range
- Setting the throttle and applying the train brake
- Automatic deactivation when the context closes

Usage:
    python scripts/example_usage.py                  # brakes with TrainBrake
    python scripts/example_usage.py LocomotiveBrake  # any channel name

Train Simulator must be running with a train loaded.
"""

import logging
import sys
import time
from pathlib import Path

# Add src to path so we can import libraildriver
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from libraildriver import Channel, Kind, RailDriverConfig, get_context, load_config

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "raildriver.yaml"
DEFAULT_BRAKE = "TrainBrake"


def main():
    """Run example control sequence"""

    brake = Channel.from_name(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BRAKE)

    config = load_config(CONFIG_PATH) if CONFIG_PATH.exists() else RailDriverConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    print("libraildriver - Example Usage")
    print("=" * 60)

    # Use context manager for automatic activation/deactivation
    with get_context(config) as ctx:
        # Example 1: Read current speed
        speed = ctx.get(Channel.SPEEDOMETER, Kind.CURRENT)
        print(f"\nCurrent speed: {speed:.1f}")

        # Example 2: Query throttle range
        low, high = ctx.limits(Channel.THROTTLE)
        print(f"Throttle range: {low:.0f} .. {high:.0f}")

        # Example 3: Set throttle to half
        print("\n" + "=" * 60)
        print("Example 3: Throttle to 50")
        ctx.set(Channel.THROTTLE, 50)
        time.sleep(5)
        print(f"  Speed now: {ctx.get(Channel.SPEEDOMETER):.1f}")

        # Example 4: Throttle off, brake on
        print("\n" + "=" * 60)
        print(f"Example 4: Throttle off, {brake.name} 100")
        ctx.set(Channel.THROTTLE, 0)
        ctx.set(brake, 100)

        print("\n" + "=" * 60)
        print("Example complete!")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)
