"""Train a rain forecasting network on a table and report its metrics."""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from rainnet.activations import Activation
from rainnet.matrix import CsvFormatError, read_csv
from rainnet.metrics import DEFAULT_THREADS, evaluate, evaluate_concurrent
from rainnet.network import Layer, Network

INPUT_SIZE = 5
OUTPUT_SIZE = 1
SEQUENTIAL_HIDDEN_SIZE = 8
CONCURRENT_HIDDEN_SIZE = 1024
EPOCHS = 200
TRAIN_SAMPLES = 2000
TEST_SAMPLES = 500
LEARNING_RATE = 0.01


def build_network(hidden_size: int, rng: np.random.Generator | None = None) -> Network:
    """Input layer, a leaky-ReLU hidden layer and a sigmoid output."""
    rng = rng if rng is not None else np.random.default_rng()
    return Network(
        [
            Layer(INPUT_SIZE, 0, rng=rng),
            Layer(hidden_size, INPUT_SIZE, Activation.LEAKY_RELU, rng=rng),
            Layer(OUTPUT_SIZE, hidden_size, Activation.SIGMOID, rng=rng),
        ]
    )


def _take(data: np.ndarray, samples: int, what: str) -> np.ndarray:
    if samples < 0 or samples > len(data):
        raise ValueError(f"{what} needs {samples} rows, the table has {len(data)}")
    return data[:samples]


def train(
    network: Network,
    data,
    epochs: int = EPOCHS,
    samples: int = TRAIN_SAMPLES,
    eta: float = LEARNING_RATE,
) -> list[float]:
    """Train on the first `samples` rows for `epochs` passes; return each pass's error."""
    rows = _take(np.asarray(data, dtype=np.float32), samples, "training")
    features = network.input_size
    if rows.size and rows.shape[1] <= features:
        raise ValueError("training rows need features followed by targets")
    errors = []
    for _ in range(epochs):
        total = np.float32(0.0)
        for row in rows:
            total += np.float32(network.train_step(row[:features], row[features:], eta))
        errors.append(float(total))
    return errors


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rainnet", description="Train a rain forecasting network and report its metrics."
    )
    parser.add_argument("--train", default="weather_train.csv", help="training table")
    parser.add_argument("--test", default="weather_test.csv", help="test table")
    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="also evaluate with worker threads and print timings",
    )
    parser.add_argument("--hidden", type=int, help="hidden layer size")
    parser.add_argument("--epochs", type=int, default=EPOCHS)
    parser.add_argument("--train-samples", type=int, default=TRAIN_SAMPLES)
    parser.add_argument("--test-samples", type=int, default=TEST_SAMPLES)
    parser.add_argument("--eta", type=float, default=LEARNING_RATE)
    parser.add_argument("--threads", type=int, default=DEFAULT_THREADS)
    parser.add_argument("--seed", type=int, help="seed for the initial weights")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    hidden = args.hidden
    if hidden is None:
        hidden = CONCURRENT_HIDDEN_SIZE if args.concurrent else SEQUENTIAL_HIDDEN_SIZE

    try:
        train_data = read_csv(args.train)
        network = build_network(hidden, np.random.default_rng(args.seed))

        start = time.monotonic()
        train(network, train_data, args.epochs, args.train_samples, args.eta)
        elapsed = time.monotonic() - start

        test_data = _take(read_csv(args.test), args.test_samples, "testing")

        if not args.concurrent:
            print(evaluate(network, test_data).report(elapsed))
            return 0

        start = time.monotonic()
        print(evaluate(network, test_data).to_csv_line(elapsed))
        print(f"TS: {time.monotonic() - start:f}\n")

        start = time.monotonic()
        print(evaluate_concurrent(network, test_data, args.threads).to_csv_line(elapsed))
        print(f"TC: {time.monotonic() - start:f}")
    except OSError as error:
        print(f"rainnet: cannot open file: {error}", file=sys.stderr)
        return 1
    except CsvFormatError as error:
        print(f"rainnet: {error}", file=sys.stderr)
        return 2
    except ValueError as error:
        print(f"rainnet: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())