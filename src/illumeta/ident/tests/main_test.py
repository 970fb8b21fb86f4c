import gzip
import unittest as ut
from pathlib import Path
from tempfile import TemporaryDirectory

from click.testing import CliRunner

from illumeta.core.logs import Level, restore_config, set_config
from illumeta.ident.main import cli, ident_csv_path, run
from illumeta.ident.table import READ_NAME, read_metadata_table

FASTQ_1 = ("@HWUSI-EAS100R:6:73:941:1973#0/1\n"
           "ACGT\n"
           "+\n"
           "IIII\n"
           "@HWUSI-EAS100R:6:73:941:1974#ATCACG/1\n"
           "ACGT\n"
           "+\n"
           "IIII\n")

FASTQ_2 = ("@EAS139:136:FC706VJ:2:2104:15343:197393 1:Y:18:ATCACG\n"
           "GATTTGGGGT\n"
           "+\n"
           "!''*((((**\n"
           "@not-illumina\n"
           "A\n"
           "+\n"
           "I\n")


class TestIdentCsvPath(ut.TestCase):

    def test_csv_path(self):
        for name in ["reads.fq", "reads.fastq.gz", "reads.fq.gz"]:
            with self.subTest(name=name):
                self.assertEqual(ident_csv_path(Path("out", name)),
                                 Path("out", "reads.ident.csv"))


class TestRun(ut.TestCase):

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.in_dir = self.tmp.joinpath("in")
        self.out_dir = self.tmp.joinpath("out")
        self.in_dir.joinpath("sub").mkdir(parents=True)
        self.in_dir.joinpath("a.fq").write_text(FASTQ_1)
        with gzip.open(self.in_dir.joinpath("sub", "b.fastq.gz"), "wt") as f:
            f.write(FASTQ_2)

    def tearDown(self):
        self._tmp.cleanup()

    @restore_config
    def test_run_dir(self):
        set_config(verbosity=Level.FATAL - 1)
        csv_files = run([self.in_dir], out_dir=self.out_dir, num_cpus=1)
        self.assertEqual(csv_files,
                         [self.out_dir.joinpath("a.ident.csv").resolve(),
                          self.out_dir.joinpath("sub",
                                                "b.ident.csv").resolve()])
        table_a = read_metadata_table(csv_files[0])
        self.assertEqual(table_a["type"].tolist(), ["pre-casava"] * 2)
        self.assertEqual(table_a["index"].tolist(), [0, -1])
        table_b = read_metadata_table(csv_files[1])
        self.assertEqual(table_b[READ_NAME].tolist(),
                         ["EAS139:136:FC706VJ:2:2104:15343:197393",
                          "not-illumina"])
        self.assertEqual(table_b["type"].tolist(), ["casava", "undefined"])

    @restore_config
    def test_run_drop_bad(self):
        set_config(verbosity=Level.FATAL - 1)
        fastq = self.in_dir.joinpath("sub", "b.fastq.gz")
        csv_files = run([fastq],
                        out_dir=self.out_dir,
                        keep_bad=False,
                        num_cpus=1)
        self.assertEqual(csv_files,
                         [self.out_dir.joinpath("b.ident.csv").resolve()])
        table = read_metadata_table(csv_files[0])
        self.assertEqual(table["type"].tolist(), ["casava"])

    @restore_config
    def test_cli(self):
        set_config(verbosity=Level.FATAL - 1)
        result = CliRunner().invoke(cli, [str(self.in_dir.joinpath("a.fq")),
                                          "--out-dir", str(self.out_dir),
                                          "--num-cpus", "1"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(self.out_dir.joinpath("a.ident.csv").is_file())


if __name__ == "__main__":
    ut.main(verbosity=2)
