# rainnet

rainnet trains a small feed-forward neural network to predict whether it
will rain from rows of numeric weather measurements. The network has an
input layer of five features, one hidden layer with Leaky ReLU activation
and a single sigmoid output neuron. It is trained by per-sample gradient
descent on halved squared error. An output of 0.55 or more counts as
"rain" (class 1); anything lower, including NaN, counts as class 0.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Data

Tables are plain comma-separated numbers with no header line. Each row
holds five feature columns followed by a label column (`1` for rain, `0`
for no rain). The first line fixes the number of columns: extra fields on
later lines are ignored, and a line with fewer fields, or an empty file,
raises `rainnet.matrix.CsvFormatError`. A field that does not start with a
number reads as `0`.

Rows whose label is neither 0 nor 1 are counted in the number of samples
evaluated (and so in accuracy) but in none of the confusion counts.

## Command line

From a directory holding `weather_train.csv` and `weather_test.csv`, run:

```
rainnet
```

This trains a network with 8 hidden neurons for 200 epochs over the first
2000 training rows with a learning rate of 0.01, evaluates it on the first
500 test rows and prints a readable summary of accuracy, precision,
recall, F1 score and training time in seconds.

```
rainnet --concurrent
```

uses 1024 hidden neurons by default and evaluates twice, first in one
thread and then shared out among worker threads. Each result is printed
as one comma-separated line

```
accuracy,precision,recall,f1,training_seconds
```

followed by the time that evaluation took (`TS:` for the single-threaded
run, `TC:` for the threaded one).

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `--train PATH` | `weather_train.csv` | training table |
| `--test PATH` | `weather_test.csv` | test table |
| `--concurrent` | off | also evaluate with worker threads, print CSV lines and timings |
| `--hidden N` | 8, or 1024 with `--concurrent` | hidden layer size |
| `--epochs N` | 200 | training passes |
| `--train-samples N` | 2000 | training rows used |
| `--test-samples N` | 500 | test rows used |
| `--eta X` | 0.01 | learning rate |
| `--threads N` | 16 | worker threads for `--concurrent` |
| `--seed N` | random | seed for the initial weights |

A table with fewer rows than the requested sample count is an error. The
command exits with status 1 when a file cannot be opened or an argument
does not fit the data, and with status 2 when a table is malformed.

## Library use

```python
import numpy as np

from rainnet.cli import build_network, train
from rainnet.matrix import read_csv
from rainnet.metrics import evaluate, evaluate_concurrent

train_rows = read_csv("weather_train.csv")
test_rows = read_csv("weather_test.csv")

network = build_network(8, np.random.default_rng(0))
errors = train(network, train_rows, 200, 2000, 0.01)  # one error per epoch

metrics = evaluate(network, test_rows)
print(metrics.report(0.0))

threaded = evaluate_concurrent(network, test_rows, 16)
print(threaded.to_csv_line(0.0))
```

The building blocks:

- `rainnet.matrix`: `read_csv(path)` and `parse_rows(lines)` turn
  comma-separated text into a `float32` NumPy matrix; `CsvFormatError`
  (a `ValueError`) reports an empty table or a short row.
- `rainnet.activations`: `relu`, `sigmoid`, `leaky_relu` and their
  derivatives (taken from the activated output), bundled as the enum
  `Activation` with `apply(z)` and `derivative(s)`.
- `rainnet.network`: `Layer(size, input_size, activation=None, *, rng,
  weights, bias)` with `set_input`, `forward`, `update_parameters`,
  `backward_hidden` and `backward_output`; a layer without an activation
  serves as the input layer. `Network(layers)` checks that the layers fit
  together and offers `predict(features)` and
  `train_step(features, target, eta)`, which returns the error before
  the update. Initial weights are drawn uniformly from [-1, 1], biases
  start at zero.
- `rainnet.metrics`: `classify(output)`, `evaluate(network, data)`,
  `evaluate_concurrent(network, data, threads=16)` and the frozen
  dataclass `Metrics` (`tp`, `tn`, `fp`, `fn`, `samples`) with
  `accuracy`, `precision`, `recall`, `f1`, `to_csv_line(total)` and
  `report(total)`. Metrics can be added together. Threaded evaluation
  runs the network under a lock, so it gives the same counts as
  `evaluate`.
- `rainnet.cli`: `build_network(hidden_size, rng=None)`,
  `train(network, data, epochs, samples, eta)` and `main(argv=None)`.

## What it does not do

rainnet has no way to save or load a trained network: weights live only
in memory for the duration of a run. It does not shuffle, normalise or
split data, and it reads no header lines.