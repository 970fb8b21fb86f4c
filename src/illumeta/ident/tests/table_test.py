import unittest as ut
from pathlib import Path
from tempfile import TemporaryDirectory

from illumeta.core.logs import Level, restore_config, set_config
from illumeta.ident.parse import Identifier
from illumeta.ident.table import (ERROR,
                                  READ_NAME,
                                  TABLE_COLUMNS,
                                  read_metadata_table,
                                  tabulate_metadata,
                                  write_metadata_table)

IDENTIFIERS = [
    Identifier("HWUSI-EAS100R:6:73:941:1973#0/1"),
    Identifier("EAS139:136:FC706VJ:2:2104:15343:197393", "1:Y:18:ATCACG"),
    Identifier("read3"),
    Identifier("EAS139:136:FC706VJ:2:2104:15343:197394", "2:N:0:ATCNCG"),
]


class TestTabulateMetadata(ut.TestCase):

    @restore_config
    def test_keep_bad(self):
        set_config(verbosity=Level.FATAL - 1)
        table = tabulate_metadata(IDENTIFIERS)
        self.assertEqual(table.columns.tolist(), TABLE_COLUMNS)
        self.assertEqual(table[READ_NAME].tolist(),
                         [i.name for i in IDENTIFIERS])
        self.assertEqual(table["type"].tolist(),
                         ["pre-casava", "casava", "undefined", "undefined"])
        self.assertEqual(table["lane"].tolist(), [6, 2, 0, 0])
        self.assertEqual(table["tag"].tolist(), ["", "ATCACG", "", ""])
        self.assertEqual(table[ERROR].iloc[0], "")
        self.assertEqual(table[ERROR].iloc[1], "")
        self.assertIn("fields", table[ERROR].iloc[2])
        self.assertIn("ATCNCG", table[ERROR].iloc[3])

    @restore_config
    def test_drop_bad(self):
        set_config(verbosity=Level.FATAL - 1)
        table = tabulate_metadata(IDENTIFIERS, keep_bad=False)
        self.assertEqual(table[READ_NAME].tolist(),
                         [i.name for i in IDENTIFIERS[:2]])
        self.assertEqual(table[ERROR].tolist(), ["", ""])

    def test_empty(self):
        table = tabulate_metadata([])
        self.assertEqual(table.columns.tolist(), TABLE_COLUMNS)
        self.assertEqual(len(table), 0)


class TestWriteReadMetadataTable(ut.TestCase):

    @restore_config
    def test_write_read(self):
        set_config(verbosity=Level.FATAL - 1)
        table = tabulate_metadata(IDENTIFIERS)
        with TemporaryDirectory() as tmp:
            csv_file = Path(tmp).joinpath("sub", "reads.ident.csv")
            self.assertEqual(write_metadata_table(table, csv_file), csv_file)
            result = read_metadata_table(csv_file)
        self.assertEqual(result.columns.tolist(), TABLE_COLUMNS)
        self.assertEqual(result[READ_NAME].tolist(),
                         table[READ_NAME].tolist())
        self.assertEqual(result["run"].tolist(), [-1, 136, 0, 0])
        self.assertEqual(result["bad_read"].tolist(),
                         [False, True, False, False])
        self.assertEqual(result["tag"].tolist(), ["", "ATCACG", "", ""])
        self.assertEqual(result["flow_cell"].tolist(),
                         ["", "FC706VJ", "", ""])

    @restore_config
    def test_no_overwrite(self):
        set_config(verbosity=Level.FATAL - 1)
        table = tabulate_metadata(IDENTIFIERS[:1])
        with TemporaryDirectory() as tmp:
            csv_file = Path(tmp).joinpath("reads.ident.csv")
            csv_file.write_text("old")
            write_metadata_table(table, csv_file)
            self.assertEqual(csv_file.read_text(), "old")
            write_metadata_table(table, csv_file, force=True)
            self.assertNotEqual(csv_file.read_text(), "old")


if __name__ == "__main__":
    ut.main(verbosity=2)
