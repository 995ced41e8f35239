#!/usr/bin/env python3
"""Search for closed knight's tours, with optional tour logging & replay."""

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from tqdm.auto import tqdm

from knightstour import (
    Coord,
    SearchConfig,
    SearchDriver,
    TourValidationError,
    tour_to_coordinates,
    validate_tour,
)
from knightstour.search import Tour

POLL_INTERVAL = 0.05


def load_config(args: argparse.Namespace) -> SearchConfig:
    cfg = {}
    if args.config:
        cfg_path = Path(args.config)
        if cfg_path.exists():
            cfg = yaml.safe_load(cfg_path.read_text()) or {}
    board_size = args.board_size if args.board_size is not None else cfg.get("board_size", 8)
    start = args.start if args.start is not None else cfg.get("start", [0, 0])
    max_tours = args.max_tours if args.max_tours is not None else cfg.get("max_tours", 1)
    max_iterations = args.max_iterations if args.max_iterations is not None else cfg.get("max_iterations")
    return SearchConfig(
        board_size=int(board_size),
        start=(int(start[0]), int(start[1])),
        max_tours=max_tours,
        max_iterations=max_iterations,
    )


def encode_tour(tour: Tour) -> List[List[int]]:
    return [list(move.as_tuple()) for move in tour]


def decode_tour(raw: List[List[int]]) -> Tour:
    return [Coord.from_sequence(move) for move in raw]


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved tour log to {path}")


def replay_logged_tours(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    board_size = int(metadata.get("board_size", 8))
    start = Coord.from_sequence(metadata.get("start", [0, 0]))
    tours = [decode_tour(raw) for raw in data.get("tours", [])]

    invalid = []
    for index, tour in enumerate(tours):
        try:
            validate_tour(tour, board_size, start)
        except TourValidationError as exc:
            invalid.append({"index": index, "error": str(exc)})
            if verbose:
                print(f"Tour {index}: invalid ({exc})")
            continue
        if verbose:
            squares = [list(square.as_tuple()) for square in tour_to_coordinates(tour, start)]
            print(f"Tour {index}: valid, squares {json.dumps(squares)}")

    summary = {
        "board_size": board_size,
        "start": list(start.as_tuple()),
        "tours": len(tours),
        "valid": len(tours) - len(invalid),
        "invalid": invalid,
    }
    if verbose:
        print(json.dumps(summary, indent=2))
    return summary


def search(config: SearchConfig, *, poll_interval: float = POLL_INTERVAL) -> Dict[str, object]:
    driver = SearchDriver(config)
    tours: List[Tour] = []
    driver.start()
    progress = tqdm(total=config.max_tours, desc="Tours", unit="tour")
    try:
        while driver.running:
            tour = driver.channel.try_recv()
            if tour is None:
                time.sleep(poll_interval)
                continue
            tours.append(tour)
            progress.update(1)
        stats = driver.join()
    except KeyboardInterrupt:
        driver.stop()
        stats = driver.join()
    finally:
        driver.channel.close()
        progress.close()

    remaining = driver.channel.drain()
    tours.extend(remaining)
    return {"stats": stats.as_dict(), "tours": tours}


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Search for closed knight's tours.")
    parser.add_argument("--config", type=str, default="configs/search.yaml")
    parser.add_argument("--board-size", type=int)
    parser.add_argument("--start", type=int, nargs=2, metavar=("FILE", "RANK"))
    parser.add_argument("--max-tours", type=int)
    parser.add_argument("--max-iterations", type=int)
    parser.add_argument("--log-file", type=str, help="Write found tours to a JSON log")
    parser.add_argument("--replay-log", type=str, help="Validate the tours in a JSON log and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.replay_log:
        replay_logged_tours(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    config = load_config(args)
    result = search(config)
    tours = result["tours"]
    for index, tour in enumerate(tours):
        print(json.dumps({"tour": index + 1, "moves": encode_tour(tour)}))
    print(json.dumps(result["stats"], indent=2))

    if args.log_file:
        metadata = {
            "board_size": config.board_size,
            "start": list(config.start),
            "stats": result["stats"],
        }
        save_log({"metadata": metadata, "tours": [encode_tour(tour) for tour in tours]}, Path(args.log_file))


if __name__ == "__main__":
    main()
