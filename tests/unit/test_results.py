"""Unit tests for deployment results and the result file."""

from pathlib import Path

from autodeploy.executor.results import (
    DeploymentResult,
    RoundReport,
    append_result_line,
    format_result_line,
)


class TestFormatResultLine:
    """Test the result line format."""

    def test_addresses_joined_by_commas(self):
        line = format_result_line(11155111, ["0xA", "0xB"])
        assert line == "DEPLOYED_CONTRACTS_11155111=0xA,0xB"

    def test_no_addresses(self):
        """Test that a round with no success still produces a line."""
        assert format_result_line(1, []) == "DEPLOYED_CONTRACTS_1="


class TestAppendResultLine:
    """Test appending to the result file."""

    def test_creates_file(self, tmp_path: Path):
        path = tmp_path / "hasilDeploy.txt"

        append_result_line(path, 31337, ["0xA"])

        assert path.read_text() == "\nDEPLOYED_CONTRACTS_31337=0xA"

    def test_existing_content_is_kept(self, tmp_path: Path):
        """Test that earlier lines are never rewritten."""
        path = tmp_path / "hasilDeploy.txt"
        path.write_text("previous run\n")

        append_result_line(path, 1, ["0xA"])
        append_result_line(path, 1, ["0xB", "0xC"])

        assert path.read_text() == (
            "previous run\n"
            "\nDEPLOYED_CONTRACTS_1=0xA"
            "\nDEPLOYED_CONTRACTS_1=0xB,0xC"
        )

    def test_parent_directory_is_created(self, tmp_path: Path):
        path = tmp_path / "out" / "results.txt"

        line = append_result_line(path, 5, [])

        assert line == "DEPLOYED_CONTRACTS_5="
        assert path.exists()


class TestRoundReport:
    """Test round aggregation."""

    def test_addresses_and_failures(self):
        report = RoundReport(
            chain_id=1,
            attempted=3,
            results=[
                DeploymentResult(index=1, deployer="0x1", address="0xA"),
                DeploymentResult(index=2, deployer="0x2", error="ValueError: boom"),
                DeploymentResult(index=3, deployer="0x3", address="0xC"),
            ],
        )

        assert report.addresses == ["0xA", "0xC"]
        assert [r.index for r in report.failures] == [2]

    def test_result_without_address_is_not_ok(self):
        assert not DeploymentResult(index=1).ok
