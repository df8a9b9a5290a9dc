"""
ytviewer - Command Line Entry Point
Lists, manages and plays the latest videos of subscribed channels.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from .aggregator import FeedAggregator
from .core.config import AppConfig, ConfigLoader, ConfigValidationError
from .core.youtube.video import Video
from .errors import ValidationError, YTViewerError
from .shared.storage.storage_manager import StorageManager, WatchedStore


def setup_logging(logs_dir: Path, verbose: bool = False) -> logging.Logger:
    """Configure logging with file and console handlers."""
    log_file = logs_dir / "app.log"

    # Configure logging format
    log_format = "%(asctime)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Console only shows problems so listings stay readable
    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=log_format,
        datefmt=date_format,
        handlers=[
            logging.FileHandler(log_file, mode='a', encoding='utf-8'),
            console
        ]
    )

    return logging.getLogger(__name__)


def load_configuration(logger: logging.Logger, loader: ConfigLoader) -> AppConfig:
    """Load and validate application configuration."""
    logger.info(f"Loading configuration from: {loader.config_path}")

    try:
        config = loader.load()
    except ConfigValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        sys.exit(1)
    except YTViewerError as e:
        logger.error(f"Could not prepare configuration: {e}")
        sys.exit(1)

    logger.info("Configuration validated successfully")
    logger.info(f"  Subscriptions: {len(config.subscriptions)}")
    logger.info(f"  Max Videos per Channel: {config.max_videos}")
    logger.info(f"  Cache Duration: {config.cache_duration} min")
    return config


SESSION_HELP = (
    "Commands: l list, r refresh, p N play, w N mark watched, "
    "s subscriptions, a ID subscribe, d ID unsubscribe, q quit"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ytviewer",
        description="Latest videos from your subscribed YouTube channels"
    )
    parser.add_argument("--config-dir", help="Configuration directory (default: ~/.config/ytviewer)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to the console")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("session", help="Interactive session that keeps the video cache between actions")
    commands.add_parser("latest", help="List the latest videos")
    commands.add_parser("subs", help="List subscribed channels")

    add = commands.add_parser("add", help="Subscribe to a channel")
    add.add_argument("channel_id")

    remove = commands.add_parser("remove", help="Unsubscribe from a channel")
    remove.add_argument("channel_id")

    play = commands.add_parser("play", help="Play a video in mpv")
    play.add_argument("video_id")

    watched = commands.add_parser("watched", help="Mark a video as watched")
    watched.add_argument("video_id")

    return parser


def format_time_ago(published: datetime, now: Optional[datetime] = None) -> str:
    """Relative age for the last 30 days, calendar date after that."""
    now = now or datetime.now(timezone.utc)
    seconds = (now - published).total_seconds()

    if seconds < 60:
        return "just now"
    for unit, size, limit in (("minute", 60, 3600), ("hour", 3600, 86400), ("day", 86400, 30 * 86400)):
        if seconds < limit:
            count = int(seconds // size)
            return f"{count} {unit}{'' if count == 1 else 's'} ago"
    return f"{published:%b} {published.day}, {published.year}"


def print_latest(aggregator: FeedAggregator, numbered: bool = False) -> List[Video]:
    entries = aggregator.get_latest_with_watched()
    for index, (video, seen) in enumerate(entries, start=1):
        marker = "✓" if seen else " "
        label = f"{index:>3}. " if numbered else ""
        age = format_time_ago(video.published_at)
        print(f"{marker} {label}{video.title}\n      {video.channel_name} • {age}  [{video.video_id}]")
    return [video for video, _ in entries]


def print_subscriptions(aggregator: FeedAggregator) -> None:
    for sub in aggregator.get_subscription_info():
        subscribers = f"{sub.subscriber_count:,} subscribers" if sub.subscriber_count > 0 else "Unknown"
        print(f"{sub.channel_id}  {sub.title}  ({subscribers}, {sub.video_count:,} videos)")


def _pick_video(videos: List[Video], arg: str) -> str:
    """A list number from the last listing, or a raw video ID."""
    if not arg:
        raise ValidationError("empty", "Give a list number or a video ID")
    if arg.isdigit():
        number = int(arg)
        if not 1 <= number <= len(videos):
            raise ValidationError("not found", f"No video numbered {number}")
        return videos[number - 1].video_id
    return arg


def run_session(
    aggregator: FeedAggregator,
    logger: logging.Logger,
    read: Optional[Callable[[str], str]] = None
) -> int:
    """
    Line-oriented session over a single FeedAggregator.

    The video cache lives as long as the session, so listing again within
    the cache duration costs no API calls and ``r`` forces a refetch.
    """
    read = read or input
    print(SESSION_HELP)

    videos: List[Video] = []
    line = "l"
    while True:
        command, _, arg = line.strip().partition(" ")
        arg = arg.strip()
        command = command.lower()

        if command in ("q", "quit"):
            return 0

        try:
            if command in ("l", "list"):
                videos = print_latest(aggregator, numbered=True)
            elif command in ("r", "refresh"):
                aggregator.clear_video_cache()
                videos = print_latest(aggregator, numbered=True)
            elif command in ("p", "play"):
                video_id = _pick_video(videos, arg)
                aggregator.play_video(video_id)
                print(f"Playing {video_id}")
            elif command in ("w", "watched"):
                video_id = _pick_video(videos, arg)
                aggregator.mark_watched(video_id)
                print(f"Marked {video_id} as watched")
            elif command in ("s", "subs"):
                print_subscriptions(aggregator)
            elif command in ("a", "add"):
                aggregator.add_subscription(arg)
                print(f"Subscribed to {arg}")
            elif command in ("d", "remove"):
                aggregator.remove_subscription(arg)
                print(f"Unsubscribed from {arg}")
            elif command:
                print(SESSION_HELP)
        except YTViewerError as e:
            logger.error(f"{command} failed: {e}")

        try:
            line = read("ytviewer> ")
        except EOFError:
            print()
            return 0


def build_aggregator(config: AppConfig, loader: ConfigLoader, storage: StorageManager) -> FeedAggregator:
    return FeedAggregator.from_config(config, loader, WatchedStore(storage.watched_path))


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution entry for ytviewer."""
    args = build_parser().parse_args(argv)

    storage = StorageManager(args.config_dir)
    logger = setup_logging(storage.logs_path, args.verbose)

    loader = ConfigLoader(storage.config_path)
    config = load_configuration(logger, loader)

    try:
        aggregator = build_aggregator(config, loader, storage)

        if args.command == "session":
            return run_session(aggregator, logger)
        elif args.command == "latest":
            print_latest(aggregator)
        elif args.command == "subs":
            print_subscriptions(aggregator)
        elif args.command == "add":
            aggregator.add_subscription(args.channel_id)
            print(f"Subscribed to {args.channel_id}")
        elif args.command == "remove":
            aggregator.remove_subscription(args.channel_id)
            print(f"Unsubscribed from {args.channel_id}")
        elif args.command == "play":
            aggregator.play_video(args.video_id)
        elif args.command == "watched":
            aggregator.mark_watched(args.video_id)
    except YTViewerError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
