import json

from unit_price_compare.main import main


def _write_products(tmp_path, rows):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_compare_prints_report(tmp_path, capsys):
    path = _write_products(tmp_path, [
        {"id": "a", "name": "Arroz 1kg", "quantity": 1, "unit": "kg", "price": 10},
        {"id": "b", "name": "Arroz 500g", "quantity": 500, "unit": "g", "price": 6},
    ])
    assert main(["compare", str(path)]) == 0
    out = capsys.readouterr().out
    assert "CATEGORIA: WEIGHT" in out
    assert "Melhor opção: Arroz 1kg" in out
    assert "20.0% mais caro" in out


def test_compare_writes_json(tmp_path, capsys):
    path = _write_products(tmp_path, [
        {"name": "A", "quantity": 1, "unit": "l", "price": 4},
        {"name": "B", "quantity": 2, "unit": "l", "price": 6},
    ])
    out_path = tmp_path / "artifacts" / "r.json"
    assert main(["compare", str(path), "--json", str(out_path)]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data[0]["best_product"] == "2"


def test_compare_nothing_to_compare(tmp_path, capsys):
    path = _write_products(tmp_path, [
        {"name": "A", "quantity": 1, "unit": "l", "price": 4},
        {"name": "B", "quantity": 1, "unit": "kg", "price": 6},
    ])
    assert main(["compare", str(path)]) == 1
    assert "Nothing to compare" in capsys.readouterr().out


def test_compare_bad_file(tmp_path, capsys):
    assert main(["compare", str(tmp_path / "nope.json")]) == 2
    assert "ERROR: File not found" in capsys.readouterr().out


def test_extract_command(capsys):
    assert main(["extract", "4 rolos, 30 metros, 2 camadas"]) == 0
    out = capsys.readouterr().out
    assert "count:  4" in out
    assert "meters: 30.0" in out
    assert "layers: 2" in out
    assert "sheets: None" in out


def test_units_and_suggest(capsys):
    assert main(["units", "--category", "time"]) == 0
    out = capsys.readouterr().out
    assert "dia" in out and "1440" in out
    assert "kg" not in out

    assert main(["suggest", "bebidas"]) == 0
    assert capsys.readouterr().out.strip() == "ml l"


def test_version_and_config_keys(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "0.1.0"
    assert main(["config", "keys"]) == 0
    assert "UNIT_PRICE_CURRENCY" in capsys.readouterr().out


def test_compare_non_utf8_file(tmp_path, capsys):
    path = tmp_path / "products.csv"
    path.write_bytes("name;quantity;unit;price\nPapel Higiênico;1;un;10,00\n".encode("cp1252"))
    assert main(["compare", str(path)]) == 2
    assert "ERROR: Failed to read" in capsys.readouterr().out


def test_compare_accepts_verbose_after_file(tmp_path, capsys):
    path = _write_products(tmp_path, [
        {"name": "A", "quantity": 1, "unit": "kg", "price": 10},
        {"name": "B", "quantity": 500, "unit": "g", "price": 6},
    ])
    assert main(["compare", str(path), "--verbose"]) == 0
    assert main(["-v", "compare", str(path)]) == 0
    assert "CATEGORIA: WEIGHT" in capsys.readouterr().out
