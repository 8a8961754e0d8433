import json

from scipy.sparse import load_npz

from chunksel.extract import main
from chunksel.preprocessing.format_converters import sentence_to_dict

from test_lattice_reader import LATTICE


def test_cli_writes_features(tmp_path, capsys) -> None:
    input_path = tmp_path / "input.cabocha"
    input_path.write_text(LATTICE, encoding="utf-8")
    output_path = tmp_path / "features.jsonl"
    stats_path = tmp_path / "stats.json"

    exit_code = main([str(input_path), "--output", str(output_path), "--stats", str(stats_path)])

    assert exit_code == 0
    records = [json.loads(line) for line in output_path.read_text(encoding="utf-8").splitlines()]
    assert len(records) == 2
    assert records[0]['output_layer'] == "SELECTION"
    assert records[0]['chunks'][0]['features'][-1] == "F_BOS:1"
    assert records[1]['chunks'][0]['features'][-2:] == ["F_BOS:1", "F_EOS:1"]
    assert json.loads(stats_path.read_text(encoding="utf-8"))['total_chunks'] == 3
    assert "CHUNK FEATURE STATISTICS" in capsys.readouterr().out


def test_cli_fatal_configuration_error(tmp_path, capsys) -> None:
    input_path = tmp_path / "input.cabocha"
    input_path.write_text(LATTICE, encoding="utf-8")
    config_path = tmp_path / "chunksel.yaml"
    config_path.write_text("charset: KLINGON-8\n", encoding="utf-8")

    exit_code = main([str(input_path), "--config", str(config_path)])

    assert exit_code == 1
    assert "Fatal configuration error" in capsys.readouterr().err


def test_sentence_to_dict(selector, ipa_sentence) -> None:
    assert selector.parse(ipa_sentence)

    record = sentence_to_dict(ipa_sentence)

    assert record['posset'] == "IPA"
    assert record['chunks'][1]['head_pos'] == 0
    assert record['tokens'][4]['surface'] == "。"


def test_cli_writes_feature_matrix(tmp_path) -> None:
    input_path = tmp_path / "input.cabocha"
    input_path.write_text(LATTICE, encoding="utf-8")
    matrix_path = tmp_path / "features.npz"

    exit_code = main([str(input_path), "--matrix", str(matrix_path)])

    assert exit_code == 0
    X = load_npz(matrix_path)
    vocab = json.loads((tmp_path / "features.vocab.json").read_text(encoding="utf-8"))
    assert X.shape == (3, len(vocab))
    assert "F_BOS:1" in vocab


def test_cli_counts_overflowing_sentences_as_rejected(tmp_path, capsys) -> None:
    input_path = tmp_path / "input.cabocha"
    input_path.write_text(LATTICE, encoding="utf-8")
    config_path = tmp_path / "chunksel.yaml"
    config_path.write_text("max_feature_count: 3\n", encoding="utf-8")
    output_path = tmp_path / "features.jsonl"

    exit_code = main([str(input_path), "--config", str(config_path), "--output", str(output_path)])

    assert exit_code == 0
    assert output_path.read_text(encoding="utf-8") == ""
    assert "2 sentences were rejected" in capsys.readouterr().out


def test_cli_malformed_lattice(tmp_path, capsys) -> None:
    input_path = tmp_path / "input.cabocha"
    input_path.write_text("* 0 x 0/0\nEOS\n", encoding="utf-8")

    exit_code = main([str(input_path)])

    assert exit_code == 1
    assert "malformed chunk line" in capsys.readouterr().err


def test_cli_non_numeric_config_value(tmp_path, capsys) -> None:
    input_path = tmp_path / "input.cabocha"
    input_path.write_text(LATTICE, encoding="utf-8")
    config_path = tmp_path / "chunksel.yaml"
    config_path.write_text("max_feature_length: abc\n", encoding="utf-8")

    exit_code = main([str(input_path), "--config", str(config_path)])

    assert exit_code == 1
    assert "abc" in capsys.readouterr().err
