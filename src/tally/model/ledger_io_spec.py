from __future__ import annotations

"""
Tests for ledger CSV conversion.
"""

from datetime import date
from decimal import Decimal

import pytest

from tally.model.entities import EntryType, Transaction
from tally.model.ledger_io import LEDGER_COLUMNS, dump_ledger_csv, load_ledger_csv


class DescribeDumpLedgerCsv:
    def it_should_write_header_and_rows_ordered_by_id(self):
        txns = [
            Transaction(id=2, amount="5.10", category_id=1, user_id=1, type="expense", date="2024-06-02"),
            Transaction(id=1, amount="100", category_id=2, user_id=1, type="income", date="2024-06-01",
                        description="Pay, June"),
        ]

        text = dump_ledger_csv(txns)
        lines = text.strip().split("\n")

        assert lines[0] == ",".join(LEDGER_COLUMNS)
        assert lines[1].startswith("1,1,2024-06-01,income,2,100,")
        assert '"Pay, June"' in lines[1]
        assert lines[2] == "2,1,2024-06-02,expense,1,5.10,"


class DescribeLoadLedgerCsv:
    def it_should_preserve_exact_amounts(self):
        text = (
            "id,user_id,date,type,category_id,amount,description\n"
            "1,1,2024-06-01,expense,4,0.10,Gum\n"
        )
        [txn] = load_ledger_csv(text)
        assert txn.amount == Decimal("0.10")
        assert txn.date == date(2024, 6, 1)
        assert txn.type == EntryType.expense
        assert txn.description == "Gum"

    def it_should_read_back_what_it_wrote(self):
        original = [
            Transaction(id=1, amount="19.99", category_id=3, user_id=7, type="expense",
                        date="2024-02-29", description="Books"),
        ]
        assert load_ledger_csv(dump_ledger_csv(original)) == original

    def it_should_ignore_unknown_columns_and_blank_lines(self):
        text = (
            "id,user_id,date,type,category_id,amount,description,extra\n"
            "1,1,2024-06-01,Income,4,10,,x\n"
            ",,,,,,,\n"
        )
        [txn] = load_ledger_csv(text)
        assert txn.type == EntryType.income

    def it_should_name_the_line_of_an_invalid_row(self):
        text = (
            "id,user_id,date,type,category_id,amount,description\n"
            "1,1,2024-06-01,expense,4,10,\n"
            "2,1,not-a-date,expense,4,10,\n"
        )
        with pytest.raises(ValueError, match="line 3"):
            load_ledger_csv(text)

    def it_should_return_empty_list_for_header_only(self):
        assert load_ledger_csv(",".join(LEDGER_COLUMNS) + "\n") == []
