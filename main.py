"""Main entry point for the TaskPulse sales task tracker."""

import argparse
import json
import logging
import sys
from pathlib import Path

from taskpulse.bootstrap.generator import SalesTaskGenerator
from taskpulse.bootstrap.loader import TaskLoader, save_snapshot
from taskpulse.store.task_store import TaskStore
from taskpulse.utils.config import get_default_config, load_config
from taskpulse.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_store(config: dict) -> TaskStore:
    """Create a store and bootstrap it from the configured snapshot."""
    store = TaskStore(config=config)
    store.bootstrap(TaskLoader(config))
    return store


def format_ranked(derived: list) -> str:
    """Render the ranked view as a fixed-width table."""
    lines = [
        f"{'#':<4} {'Title':<40} {'Priority':<9} {'Status':<12} {'Revenue':>10} {'Hours':>6} {'ROI':>9}",
        "-" * 96,
    ]
    for rank, item in enumerate(derived, start=1):
        lines.append(
            f"{rank:<4} {item.title[:40]:<40} {item.priority.value:<9} {item.status.value:<12} "
            f"{item.revenue:>10.2f} {item.time_taken:>6.1f} {item.roi:>9.2f}"
        )
    return "\n".join(lines)


def run_rank(config: dict, as_json: bool = False) -> int:
    """Print the ranked task view."""
    store = build_store(config)
    if store.error:
        print(store.error, file=sys.stderr)
        return 1
    
    if as_json:
        print(json.dumps([d.to_dict() for d in store.derived_sorted], indent=2))
    else:
        print(format_ranked(list(store.derived_sorted)))
    return 0


def run_metrics(config: dict, as_json: bool = False) -> int:
    """Print the metrics summary."""
    store = build_store(config)
    if store.error:
        print(store.error, file=sys.stderr)
        return 1
    
    if as_json:
        print(json.dumps(store.metrics.to_dict(), indent=2))
    else:
        print(store.metrics.to_human_readable())
    return 0


def run_generate(config: dict, count: int, output: str) -> int:
    """Generate a synthetic snapshot file."""
    seed = config.get('bootstrap', {}).get('seed', 42)
    tasks = SalesTaskGenerator(seed=seed).generate_tasks(count)
    path = save_snapshot(tasks, output)
    print(f"Generated {len(tasks)} tasks")
    print(f"Tasks saved to: {path}")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Sales task tracker: ranked tasks and performance metrics"
    )
    parser.add_argument(
        'command',
        choices=['rank', 'metrics', 'generate-tasks'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--snapshot',
        type=str,
        help='Task snapshot to load (overrides bootstrap.snapshot_path)'
    )
    parser.add_argument(
        '--count',
        type=int,
        help='Number of tasks to generate (overrides bootstrap.seed_count)'
    )
    parser.add_argument(
        '--output',
        type=str,
        default='results/generated_tasks.json',
        help='Output path for generate-tasks (default: results/generated_tasks.json)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print JSON instead of a table'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        help='Console log level (overrides logging.level)'
    )
    
    args = parser.parse_args(argv)
    
    config = load_config(args.config) if Path(args.config).exists() else get_default_config()
    if args.snapshot:
        config['bootstrap']['snapshot_path'] = args.snapshot
    if args.count is not None:
        config['bootstrap']['seed_count'] = args.count
    
    log_config = config.get('logging', {})
    setup_logging(args.log_level or log_config.get('level', 'INFO'), log_config.get('file'))
    logger.debug("Running %s with snapshot=%s", args.command, config["bootstrap"]["snapshot_path"])
    
    if args.command == 'rank':
        return run_rank(config, args.json)
    elif args.command == 'metrics':
        return run_metrics(config, args.json)
    elif args.command == 'generate-tasks':
        return run_generate(config, config['bootstrap']['seed_count'], args.output)
    return 2


if __name__ == "__main__":
    sys.exit(main())
