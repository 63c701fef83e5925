"""Classification metrics for a trained network."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from rainnet.network import Network

THRESHOLD = 0.55
DEFAULT_THREADS = 16

_THRESHOLD32 = np.float32(THRESHOLD)


def classify(output) -> int:
    """Turn a network output into a class: 1 at or above the threshold, else 0."""
    value = np.float32(output)
    # NaN compares false, so it falls into class 0.
    is_positive = bool(value >= _THRESHOLD32)
    if is_positive:
        return 1
    return 0


def _ratio(numerator, denominator) -> float:
    if denominator == 0:
        return 0.0
    return float(np.float32(numerator) / np.float32(denominator))


@dataclass(frozen=True)
class Metrics:
    """Confusion counts over a set of samples.

    `samples` is the number of samples evaluated; samples whose label is
    neither 0 nor 1 are counted there but in none of the four cells.
    """

    tp: int = 0
    tn: int = 0
    fp: int = 0
    fn: int = 0
    samples: int | None = None

    @property
    def total(self) -> int:
        if self.samples is not None:
            return self.samples
        return self.tp + self.tn + self.fp + self.fn

    def __add__(self, other: Metrics) -> Metrics:
        if not isinstance(other, Metrics):
            return NotImplemented
        return Metrics(
            self.tp + other.tp,
            self.tn + other.tn,
            self.fp + other.fp,
            self.fn + other.fn,
            self.total + other.total,
        )

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return float("nan")
        return _ratio(self.tp + self.tn, self.total)

    @property
    def precision(self) -> float:
        return _ratio(self.tp, self.tp + self.fp)

    @property
    def recall(self) -> float:
        return _ratio(self.tp, self.tp + self.fn)

    @property
    def f1(self) -> float:
        precision = np.float32(self.precision)
        recall = np.float32(self.recall)
        if precision + recall == 0:
            return 0.0
        return float(np.float32(2) * (precision * recall) / (precision + recall))

    def to_csv_line(self, total: float) -> str:
        """Accuracy, precision, recall, F1 and the given training time, comma separated."""
        values = (self.accuracy, self.precision, self.recall, self.f1, total)
        return ",".join(f"{value:.8f}" for value in values)

    def report(self, total: float) -> str:
        """A readable summary including the given training time in seconds."""
        return "\n".join(
            [
                "Métricas do modelo:",
                f"Acurácia: {self.accuracy:.8f}",
                f"Precisão: {self.precision:.8f}",
                f"Recall: {self.recall:.8f}",
                f"F1 Score: {self.f1:.8f}",
                f"Tempo de Treinamento: {total:.8f} segundos",
            ]
        )


def _samples(network: Network, data) -> np.ndarray:
    rows = np.asarray(data, dtype=np.float32)
    if rows.ndim != 2 or rows.shape[0] == 0:
        raise ValueError("data must be a non-empty two-dimensional table")
    if rows.shape[1] <= network.input_size:
        raise ValueError(
            f"rows need {network.input_size} features and a label, "
            f"got {rows.shape[1]} columns"
        )
    return rows


def _tally(network: Network, rows: np.ndarray, lock: threading.Lock | None = None) -> Metrics:
    counts = {"tp": 0, "tn": 0, "fp": 0, "fn": 0}
    features = network.input_size
    for row in rows:
        if lock is None:
            value = network.predict(row[:features])[0]
        else:
            with lock:
                value = network.predict(row[:features])[0]
        pred = classify(value)
        real = int(row[features])
        if real not in (0, 1):
            continue
        key = ("t" if pred == real else "f") + ("p" if pred == 1 else "n")
        counts[key] += 1
    return Metrics(samples=len(rows), **counts)


def evaluate(network: Network, data) -> Metrics:
    """Classify every row of `data` (features then label) and count the outcomes."""
    return _tally(network, _samples(network, data))


def _chunks(rows: np.ndarray, parts: int) -> Iterator[np.ndarray]:
    per_part, remaining = divmod(len(rows), parts)
    start = 0
    for index in range(parts):
        end = start + per_part + (1 if index < remaining else 0)
        yield rows[start:end]
        start = end


def evaluate_concurrent(network: Network, data, threads: int = DEFAULT_THREADS) -> Metrics:
    """Like evaluate, with the rows shared out among `threads` worker threads."""
    if threads < 1:
        raise ValueError("at least one thread is required")
    rows = _samples(network, data)
    lock = threading.Lock()
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [pool.submit(_tally, network, chunk, lock) for chunk in _chunks(rows, threads)]
        results = [future.result() for future in futures]
    return sum(results[1:], results[0])