"""Tests for CLI commands."""

import pytest
from click.testing import CliRunner
from resellit.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db, tmp_path):
    """Invoke the CLI against the temporary database and receipt folder."""
    receipts_dir = tmp_path / "receipts"

    def _invoke(*args):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--receipts-dir", str(receipts_dir), *args],
            env={"RESELLIT_OWNER": "local"},
        )

    return _invoke


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for group in ("product", "settlement", "transaction", "supplier", "budget", "report", "receipt"):
        assert group in result.output


class TestSupplierCommands:
    """Tests for supplier commands."""

    def test_add_and_list(self, invoke):
        result = invoke("supplier", "add", "Acme Wholesale", "--email", "sales@acme.test")
        assert result.exit_code == 0
        assert "Created supplier 'Acme Wholesale' (ID: 1)" in result.output

        result = invoke("supplier", "list")
        assert result.exit_code == 0
        assert "Acme Wholesale" in result.output
        assert "sales@acme.test" in result.output

    def test_duplicate(self, invoke, sample_supplier):
        result = invoke("supplier", "add", "ACME WHOLESALE")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_list_empty(self, invoke):
        result = invoke("supplier", "list")
        assert result.exit_code == 0
        assert "No suppliers found." in result.output


class TestProductCommands:
    """Tests for product commands."""

    def test_add_and_list(self, invoke):
        result = invoke(
            "product", "add", "B07XJ8C8F5", "--title", "Coasters", "--type", "Bundle",
            "--size", "4", "--buy-price", "8.99",
        )
        assert result.exit_code == 0
        assert "Added product B07XJ8C8F5" in result.output

        result = invoke("product", "list")
        assert result.exit_code == 0
        assert "B07XJ8C8F5" in result.output
        assert "Bundle" in result.output
        assert "[incomplete]" in result.output

    def test_add_invalid_asin(self, invoke):
        result = invoke("product", "add", "SHORT")
        assert result.exit_code == 1
        assert "Error: ASIN must be exactly 10 characters" in result.output

    def test_list_incomplete(self, invoke, sample_product, product_service):
        product_service.find_or_create_stub("B000000001")

        result = invoke("product", "list", "--incomplete")

        assert result.exit_code == 0
        assert "B000000001" in result.output
        assert sample_product.asin not in result.output

    def test_ship(self, invoke, sample_product):
        result = invoke("product", "ship", sample_product.asin, "2")
        assert result.exit_code == 0
        assert f"{sample_product.asin}: 2 shipped" in result.output

    def test_ship_unknown(self, invoke):
        result = invoke("product", "ship", "B000000009", "2")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_template_and_import(self, invoke, tmp_path):
        template = tmp_path / "asin_template.csv"
        result = invoke("product", "template", "--output", str(template))
        assert result.exit_code == 0

        with template.open("a", encoding="utf-8") as f:
            f.write("B08N5WRWNW,https://example.com/a.jpg,Desk lamp,Single,1,Acme,Stock,12.50,25.00,3.75,,,\n")
            f.write("BAD,,,,,,,,,,,,\n")

        result = invoke("product", "import", str(template))

        assert result.exit_code == 0
        assert "Successfully imported 1 ASINs. 0 updated, 0 skipped. 1 error." in result.output
        assert "Row 3: ASIN must be exactly 10 characters" in result.output

    def test_import_rejected_file(self, invoke, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("ASIN,Title\nB08N5WRWNW,Lamp\n", encoding="utf-8")

        result = invoke("product", "import", str(path))

        assert result.exit_code == 1
        assert "Error: Missing required columns: image_url, type, size, brand" in result.output

    def test_import_missing_file(self, invoke, tmp_path):
        result = invoke("product", "import", str(tmp_path / "nope.csv"))
        assert result.exit_code == 1
        assert "CSV file not found" in result.output

    def test_export(self, invoke, sample_product, tmp_path):
        output = tmp_path / "export.csv"
        result = invoke("product", "export", "--output", str(output))
        assert result.exit_code == 0
        assert sample_product.asin in output.read_text(encoding="utf-8")


class TestTransactionCommands:
    """Tests for transaction commands."""

    def test_add_requires_known_supplier(self, invoke):
        result = invoke("transaction", "add", "--supplier", "Nobody")
        assert result.exit_code == 1
        assert "Supplier 'Nobody' not found" in result.output

    def test_add_item_and_show(self, invoke, sample_supplier):
        result = invoke(
            "transaction", "add", "--supplier", "acme wholesale", "--date", "2024-06-03",
            "--shipping", "4.00",
        )
        assert result.exit_code == 0
        assert "Created transaction 1 (ASH-00001)" in result.output

        result = invoke("transaction", "add-item", "1", "B08N5WRWNW", "3", "2.00", "--sell", "5.00", "--fee", "0.50")
        assert result.exit_code == 0
        assert "Added item 1 to transaction 1" in result.output

        result = invoke("transaction", "show", "1")
        assert result.exit_code == 0
        assert "Acme Wholesale" in result.output
        assert "B08N5WRWNW" in result.output
        assert "Total cost: £10.00" in result.output
        assert "Profit: £7.50" in result.output

    def test_add_item_unknown_transaction(self, invoke):
        result = invoke("transaction", "add-item", "9", "B08N5WRWNW", "1", "2.00")
        assert result.exit_code == 1
        assert "Transaction 9 not found" in result.output

    def test_list_and_filters(self, invoke, sample_transaction):
        result = invoke("transaction", "list")
        assert result.exit_code == 0
        assert "PO-100" in result.output
        assert "TOTAL  Cost: £6.00 | Profit: £7.50 | Count: 1" in result.output

        result = invoke("transaction", "list", "--status", "complete")
        assert result.exit_code == 0
        assert "No transactions found." in result.output

        result = invoke("transaction", "list", "--start-date", "2024-07-01")
        assert "No transactions found." in result.output

        result = invoke("transaction", "list", "--supplier", "Nobody")
        assert result.exit_code == 1

    def test_list_rejects_two_periods(self, invoke):
        result = invoke("transaction", "list", "--this-month", "--last-month")
        assert result.exit_code == 1
        assert "Only one period option" in result.output

    def test_status(self, invoke, sample_transaction):
        result = invoke("transaction", "status", str(sample_transaction.id), "COMPLETE")
        assert result.exit_code == 0
        assert f"Transaction {sample_transaction.id} is now complete" in result.output

        result = invoke("transaction", "list", "--status", "complete")
        assert "PO-100" in result.output

    def test_status_rejects_unknown_value(self, invoke, sample_transaction):
        result = invoke("transaction", "status", str(sample_transaction.id), "lost")
        assert result.exit_code == 2

    def test_template_import(self, invoke, tmp_path):
        template = tmp_path / "transaction_template.csv"
        assert invoke("transaction", "template", "--output", str(template)).exit_code == 0

        result = invoke("transaction", "import", str(template))

        assert result.exit_code == 0
        assert "Successfully imported 1 transactions. 0 updated, 0 skipped." in result.output

        result = invoke("supplier", "list")
        assert "Example Supplier" in result.output


class TestSettlementCommands:
    """Tests for settlement commands."""

    HEADER = (
        "Date,Transaction status,Transaction type,Order ID,Product Details,"
        "Total product charges,Total promotional rebates,Amazon fees,Other,Total (GBP)\n"
    )

    def test_import_and_list(self, invoke, sample_product, tmp_path):
        path = tmp_path / "settlement.csv"
        path.write_text(
            self.HEADER
            + '03/02/2024,Released,Order Payment,203-1234567-1234567,'
            + '"Adjustable Desk Lamp with USB Charging Port, Black",25.00,0,-3.75,0,21.25\n',
            encoding="utf-8",
        )

        result = invoke("settlement", "import", str(path))
        assert result.exit_code == 0
        assert "Successfully imported 1 transactions. 1 ASIN matches found." in result.output

        result = invoke("settlement", "list")
        assert result.exit_code == 0
        assert "203-1234567-1234567" in result.output
        assert "21.25" in result.output

    def test_list_empty(self, invoke):
        result = invoke("settlement", "list")
        assert "No settlement data found." in result.output


class TestBudgetCommands:
    """Tests for budget commands."""

    def test_set_and_show(self, invoke):
        result = invoke("budget", "set", "2025", "1", "1500")
        assert result.exit_code == 0
        assert "Budget for 2025-01 set to £1,500.00" in result.output

        result = invoke("budget", "show")
        assert result.exit_code == 0
        assert "Daily target:" in result.output
        assert "Month" in result.output

    def test_set_invalid_month(self, invoke):
        result = invoke("budget", "set", "2025", "13", "100")
        assert result.exit_code == 1
        assert "Month must be between 1 and 12" in result.output

    def test_set_invalid_amount(self, invoke):
        result = invoke("budget", "set", "2025", "1", "lots")
        assert result.exit_code == 1
        assert "Could not parse amount" in result.output


class TestReportCommands:
    """Tests for report commands."""

    def test_dashboard(self, invoke, sample_transaction):
        result = invoke("report", "dashboard")
        assert result.exit_code == 0
        assert "Total orders:" in result.output
        assert "£7.50" in result.output

    def test_suppliers(self, invoke, sample_transaction):
        result = invoke("report", "suppliers")
        assert result.exit_code == 0
        assert "Acme Wholesale" in result.output
        assert "2024-06-03" in result.output

    def test_products(self, invoke, sample_transaction):
        result = invoke("report", "products")
        assert result.exit_code == 0
        assert "B08N5WRWNW" in result.output

    def test_backup(self, invoke, sample_transaction, tmp_path):
        out_dir = tmp_path / "backups"
        result = invoke("report", "backup", "--output", str(out_dir))
        assert result.exit_code == 0
        assert "Backup written to" in result.output
        assert len(list(out_dir.glob("expense-backup-*.zip"))) == 1


class TestReceiptCommands:
    """Tests for receipt commands."""

    def test_upload_list_remove(self, invoke, sample_transaction, tmp_path):
        source = tmp_path / "invoice.pdf"
        source.write_bytes(b"receipt")

        result = invoke("receipt", "upload", str(sample_transaction.id), str(source))
        assert result.exit_code == 0
        assert f"Stored local/{sample_transaction.id}-" in result.output
        assert "file://" in result.output
        stored = result.output.split("Stored ", 1)[1].splitlines()[0]

        result = invoke("receipt", "list", str(sample_transaction.id))
        assert stored in result.output

        result = invoke("transaction", "show", str(sample_transaction.id))
        assert "Receipts:" in result.output

        result = invoke("receipt", "remove", stored)
        assert result.exit_code == 0

        result = invoke("receipt", "list", str(sample_transaction.id))
        assert "No receipts found." in result.output

    def test_upload_for_unknown_transaction(self, invoke, tmp_path):
        source = tmp_path / "invoice.pdf"
        source.write_bytes(b"receipt")

        result = invoke("receipt", "upload", "42", str(source))

        assert result.exit_code == 1
        assert "Transaction 42 not found" in result.output

    def test_remove_missing(self, invoke):
        result = invoke("receipt", "remove", "local/1-123.pdf")
        assert result.exit_code == 1
        assert "not found" in result.output
