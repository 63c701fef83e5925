import numpy as np
import pytest

from rainnet.activations import Activation
from rainnet.cli import build_network, main, train


def write_table(path, rows, seed):
    rng = np.random.default_rng(seed)
    features = rng.uniform(-1.0, 1.0, (rows, 5))
    labels = (features[:, :1] > 0).astype(int)
    lines = [
        ",".join(f"{value:.4f}" for value in feature) + f",{label[0]}"
        for feature, label in zip(features, labels)
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


def table(rows, seed=5):
    rng = np.random.default_rng(seed)
    features = rng.uniform(-1.0, 1.0, (rows, 5))
    labels = (features[:, :1] > 0).astype(np.float32)
    return np.hstack([features, labels]).astype(np.float32)


def test_build_network_shape():
    network = build_network(7, np.random.default_rng(0))
    sizes = [(layer.size, layer.input_size) for layer in network.layers]
    assert sizes == [(5, 0), (7, 5), (1, 7)]
    assert network.layers[1].activation is Activation.LEAKY_RELU
    assert network.layers[2].activation is Activation.SIGMOID


def test_build_network_weights_in_range():
    network = build_network(16, np.random.default_rng(1))
    for layer in network.layers[1:]:
        assert np.all(layer.weights >= -1.0)
        assert np.all(layer.weights <= 1.0)
        assert np.all(layer.bias == 0.0)


def test_build_network_seeded_is_reproducible():
    first = build_network(4, np.random.default_rng(9))
    second = build_network(4, np.random.default_rng(9))
    assert np.array_equal(first.layers[1].weights, second.layers[1].weights)


def test_train_returns_error_per_epoch():
    network = build_network(4, np.random.default_rng(2))
    errors = train(network, table(20), epochs=3, samples=20, eta=0.01)
    assert len(errors) == 3
    assert all(error >= 0.0 for error in errors)


def test_train_reduces_error_on_separable_data():
    network = build_network(8, np.random.default_rng(4))
    errors = train(network, table(60), epochs=30, samples=60, eta=0.1)
    assert errors[-1] < errors[0]


def test_train_changes_weights():
    network = build_network(4, np.random.default_rng(2))
    before = network.layers[2].weights.copy()
    train(network, table(10), epochs=1, samples=10, eta=0.01)
    assert not np.array_equal(before, network.layers[2].weights)


def test_train_rejects_too_few_rows():
    network = build_network(4, np.random.default_rng(2))
    with pytest.raises(ValueError):
        train(network, table(5), epochs=1, samples=6, eta=0.01)


def run(argv, capsys):
    code = main(argv)
    return code, capsys.readouterr()


def test_main_sequential_report(tmp_path, capsys):
    train_file = write_table(tmp_path / "train.csv", 30, 1)
    test_file = write_table(tmp_path / "test.csv", 12, 2)
    argv = [
        "--train", str(train_file), "--test", str(test_file),
        "--epochs", "2", "--train-samples", "30", "--test-samples", "12",
        "--hidden", "4", "--seed", "0",
    ]
    code, captured = run(argv, capsys)
    lines = captured.out.splitlines()
    assert code == 0
    assert lines[0] == "Métricas do modelo:"
    assert lines[-1].startswith("Tempo de Treinamento: ")
    assert len(lines) == 6


def test_main_seeded_runs_agree(tmp_path, capsys):
    train_file = write_table(tmp_path / "train.csv", 20, 1)
    test_file = write_table(tmp_path / "test.csv", 10, 2)
    argv = [
        "--train", str(train_file), "--test", str(test_file),
        "--epochs", "2", "--train-samples", "20", "--test-samples", "10",
        "--hidden", "4", "--seed", "42",
    ]
    _, first = run(argv, capsys)
    _, second = run(argv, capsys)
    assert first.out.splitlines()[:5] == second.out.splitlines()[:5]


def test_main_concurrent_output(tmp_path, capsys):
    train_file = write_table(tmp_path / "train.csv", 20, 1)
    test_file = write_table(tmp_path / "test.csv", 10, 2)
    argv = [
        "--train", str(train_file), "--test", str(test_file), "--concurrent",
        "--epochs", "1", "--train-samples", "20", "--test-samples", "10",
        "--hidden", "4", "--threads", "3", "--seed", "1",
    ]
    code, captured = run(argv, capsys)
    lines = captured.out.splitlines()
    assert code == 0
    assert lines[1].startswith("TS: ")
    assert lines[2] == ""
    assert lines[4].startswith("TC: ")
    assert lines[0].split(",")[:4] == lines[3].split(",")[:4]


def test_main_missing_file(tmp_path, capsys):
    code, captured = run(["--train", str(tmp_path / "absent.csv")], capsys)
    assert code == 1
    assert "rainnet" in captured.err


def test_main_bad_table(tmp_path, capsys):
    bad = tmp_path / "bad.csv"
    bad.write_text("1,2,3,4,5,1\n1,2\n")
    code, _ = run(["--train", str(bad), "--train-samples", "2"], capsys)
    assert code == 2


def test_main_too_few_test_rows(tmp_path, capsys):
    train_file = write_table(tmp_path / "train.csv", 5, 1)
    test_file = write_table(tmp_path / "test.csv", 3, 2)
    argv = [
        "--train", str(train_file), "--test", str(test_file),
        "--epochs", "1", "--train-samples", "5", "--test-samples", "4",
        "--hidden", "2",
    ]
    code, captured = run(argv, capsys)
    assert code == 1
    assert "testing" in captured.err