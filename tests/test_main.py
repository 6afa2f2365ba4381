import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import main
from main import format_decimal


class TestFormatDecimal:
    def test_strips_trailing_zeros(self):
        assert format_decimal(Decimal("1.5000")) == "1.5"

    def test_whole_numbers(self):
        assert format_decimal(Decimal("100.0")) == "100"
        assert format_decimal(Decimal("0")) == "0"

    def test_four_fractional_digits(self):
        assert format_decimal(Decimal("0.0001")) == "0.0001"
        assert format_decimal(Decimal("2.12345")) == "2.1234"


class TestMain:
    def test_prints_sorted_balances(self, tmp_path, monkeypatch, capsys):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 2, 1, 2.0",
            "deposit, 1, 2, 10.0",
            "withdrawal, 1, 3, 5.0",
            "dispute, 2, 1,",
            "chargeback, 2, 1,",
        ]))
        monkeypatch.setattr(sys, "argv", ["main.py", str(csv_file)])

        main.main()

        captured = capsys.readouterr()
        assert captured.out.splitlines() == [
            "client,available,held,total,locked",
            "1,5,0,5,false",
            "2,0,0,0,true",
        ]
        assert "Processed: 5, Ignored: 0, Failed: 0, Rejected: 0" in captured.err

    def test_oversized_amount_does_not_break_output(self, tmp_path, monkeypatch, capsys):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 1, 1, 1000000000000000000000000.0001",
            "deposit, 1, 2, 999999999999999999999999.9999",
            "deposit, 2, 3, 1.5",
        ]))
        monkeypatch.setattr(sys, "argv", ["main.py", str(csv_file)])

        main.main()

        assert capsys.readouterr().out.splitlines() == [
            "client,available,held,total,locked",
            "1,999999999999999999999999.9999,0,999999999999999999999999.9999,false",
            "2,1.5,0,1.5,false",
        ]

    def test_usage_without_arguments(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["main.py"])

        with pytest.raises(SystemExit) as excinfo:
            main.main()

        assert excinfo.value.code == 1
        assert "Usage" in capsys.readouterr().err
