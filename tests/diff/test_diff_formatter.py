# tests/diff/test_diff_formatter.py
from saleor_configurator.diff.formatter import format_diff_summary
from saleor_configurator.diff.types import DiffChange, DiffOperation, DiffResult, DiffSummary, EntityType


def test_no_differences_message():
    assert format_diff_summary(DiffSummary()).startswith("No differences found")


def test_summary_is_grouped_and_totals_are_listed():
    summary = DiffSummary(results=(
        DiffResult(operation=DiffOperation.CREATE, entity_type=EntityType.CHANNELS, entity_name="Germany"),
        DiffResult(
            operation=DiffOperation.UPDATE,
            entity_type=EntityType.CHANNELS,
            entity_name="France",
            changes=(
                DiffChange.of("currencyCode", "USD", "EUR"),
                DiffChange(field="x", current=1, desired=None, description="x: gone", destructive=True),
            ),
        ),
        DiffResult(operation=DiffOperation.DELETE, entity_type=EntityType.CATEGORIES, entity_name="Old"),
    ))

    text = format_diff_summary(summary)

    assert "Channels:" in text
    assert "  + CREATE Germany" in text
    assert '      currencyCode: "USD" → "EUR"' in text
    assert "x: gone (not applied)" in text
    assert "  - DELETE Old" in text
    assert "Total: 3 change(s) (1 create, 1 update, 1 delete)" in text
    assert "never executed" in text
