"""Unit tests for request definition scaffolding."""

import pytest

from rester.modules.scaffolding import scaffold_api
from rester.modules.scaffolding.templates import to_module_name


class TestModuleNames:
    @pytest.mark.parametrize(
        "class_name,expected",
        [
            ("CreateInvoice", "create_invoice"),
            ("BillingBase", "billing_base"),
            ("HTTPStatus", "http_status"),
            ("users", "users"),
        ],
    )
    def test_to_module_name(self, class_name, expected):
        assert to_module_name(class_name) == expected


class TestScaffoldApi:
    """Tests for generating group packages."""

    def test_creates_group_with_base(self, tmp_path):
        """Group folder, leaf and base class are generated."""
        result = scaffold_api(tmp_path, "Billing", "CreateInvoice")

        folder = tmp_path / "billing"
        assert result.folder_created
        assert (folder / "__init__.py").exists()
        leaf = (folder / "create_invoice.py").read_text()
        base = (folder / "billing_base.py").read_text()
        assert "from .billing_base import BillingBase" in leaf
        assert "class CreateInvoice(BillingBase):" in leaf
        assert "class BillingBase(Rester):" in base
        assert "def set_base_url(self) -> str:" in base
        assert len(result.created) == 2

    def test_standalone_class(self, tmp_path):
        """Without a base class the leaf supplies a final endpoint."""
        result = scaffold_api(tmp_path, "Billing", "Ping", base_class=False)

        source = (tmp_path / "billing" / "ping.py").read_text()
        assert "class Ping(Rester):" in source
        assert "def set_final_endpoint(self) -> str:" in source
        assert not (tmp_path / "billing" / "billing_base.py").exists()
        assert result.created == [tmp_path / "billing" / "ping.py"]

    def test_existing_files_not_overwritten(self, tmp_path):
        """A second run skips files that already exist."""
        scaffold_api(tmp_path, "Billing", "CreateInvoice")
        leaf = tmp_path / "billing" / "create_invoice.py"
        leaf.write_text("# edited by hand\n")

        result = scaffold_api(tmp_path, "Billing", "CreateInvoice")

        assert not result.folder_created
        assert leaf.read_text() == "# edited by hand\n"
        assert len(result.skipped) == 2
        assert result.created == []

    def test_generated_module_compiles(self, tmp_path):
        scaffold_api(tmp_path, "Billing", "CreateInvoice")
        for path in (tmp_path / "billing").glob("*.py"):
            compile(path.read_text(), str(path), "exec")

    def test_requires_names(self, tmp_path):
        with pytest.raises(ValueError):
            scaffold_api(tmp_path, "", "CreateInvoice")
