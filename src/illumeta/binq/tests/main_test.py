import unittest as ut
from pathlib import Path
from tempfile import TemporaryDirectory

from click.testing import CliRunner

from illumeta.binq.main import bin_record, binq_fastq, cli, run
from illumeta.binq.scheme import DEFAULT_SCHEME, Scheme, write_scheme
from illumeta.core.logs import Level, restore_config, set_config
from illumeta.core.ngs import FastqRecord, parse_fastq

# Phred scores 0, 5, 12, 21, 26, 31, 36, 41 encoded with offset 33.
QUALS_33 = "!&-6;@EJ"
BINNED_33 = "!'07<BFI"

FASTQ = (f"@EAS139:136:FC706VJ:2:2104:15343:197393 1:N:0:ATCACG\n"
         f"ACGTACGT\n"
         f"+\n"
         f"{QUALS_33}\n"
         f"@EAS139:136:FC706VJ:2:2104:15343:197394 1:N:0:ATCACG\n"
         f"GGGG\n"
         f"+\n"
         f"IIII\n")


class TestBinRecord(ut.TestCase):

    def test_phred33(self):
        record = FastqRecord("r1", "1:N:0:ACGT", "ACGTACGT", QUALS_33)
        binned = bin_record(record, DEFAULT_SCHEME, 33, False)
        self.assertIs(binned, record)
        self.assertEqual(record.qual, BINNED_33)
        self.assertEqual(record.seq, "ACGTACGT")
        self.assertEqual(record.description, "1:N:0:ACGT")

    def test_phred64(self):
        record = FastqRecord("r1", "", "ACG", "@Kh")
        bin_record(record, DEFAULT_SCHEME, 64, False)
        # Phred scores 0, 11, 40 become 0, 15, 40.
        self.assertEqual(record.qual, "@Oh")

    def test_solexa(self):
        record = FastqRecord("r1", "", "ACG", ";Lh")
        bin_record(record, DEFAULT_SCHEME, 64, True)
        # Solexa scores -5, 12, 40 become -5, 15, 40.
        self.assertEqual(record.qual, ";Oh")

    def test_custom_scheme(self):
        record = FastqRecord("r1", "", "AC", "!I")
        bin_record(record, Scheme.from_bins([(0, 20)]), 33, False)
        self.assertEqual(record.qual, "55")


class TestBinqFastq(ut.TestCase):

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    @restore_config
    def test_binq_fastq(self):
        set_config(verbosity=Level.FATAL - 1)
        fastq_in = self.tmp.joinpath("reads.fq")
        fastq_in.write_text(FASTQ)
        fastq_out = self.tmp.joinpath("out", "reads.fq.gz")
        self.assertEqual(binq_fastq(fastq_in,
                                    fastq_out,
                                    scheme=DEFAULT_SCHEME,
                                    phred_enc=33,
                                    solexa=False,
                                    force=False),
                         fastq_out)
        records = list(parse_fastq(fastq_out))
        self.assertEqual([r.qual for r in records], [BINNED_33, "IIII"])
        self.assertEqual([r.seq for r in records], ["ACGTACGT", "GGGG"])


class TestRun(ut.TestCase):

    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.in_dir = self.tmp.joinpath("in")
        self.out_dir = self.tmp.joinpath("out")
        self.in_dir.mkdir()
        self.in_dir.joinpath("a.fastq").write_text(FASTQ)
        self.in_dir.joinpath("b.fq").write_text(FASTQ)
        self.in_dir.joinpath("notes.txt").write_text("not a FASTQ file")

    def tearDown(self):
        self._tmp.cleanup()

    @restore_config
    def test_run(self):
        set_config(verbosity=Level.FATAL - 1)
        out_fastqs = run([self.in_dir], out_dir=self.out_dir, num_cpus=1)
        self.assertEqual(out_fastqs,
                         [self.out_dir.joinpath("a.fastq").resolve(),
                          self.out_dir.joinpath("b.fq").resolve()])
        for out_fastq in out_fastqs:
            records = list(parse_fastq(out_fastq))
            self.assertEqual(records[0].qual, BINNED_33)

    @restore_config
    def test_run_scheme_file(self):
        set_config(verbosity=Level.FATAL - 1)
        scheme_file = write_scheme(Scheme.from_bins([(0, 40)]),
                                   self.tmp.joinpath("scheme.csv"))
        out_fastqs = run([self.in_dir.joinpath("a.fastq")],
                         out_dir=self.out_dir,
                         scheme_file=scheme_file,
                         num_cpus=1)
        records = list(parse_fastq(out_fastqs[0]))
        self.assertEqual(records[0].qual, "I" * 8)

    @restore_config
    def test_cli(self):
        set_config(verbosity=Level.FATAL - 1)
        result = CliRunner().invoke(cli,
                                    [str(self.in_dir.joinpath("b.fq")),
                                     "--out-dir", str(self.out_dir),
                                     "--phred-enc", "33",
                                     "--num-cpus", "1"])
        self.assertEqual(result.exit_code, 0, result.output)
        records = list(parse_fastq(self.out_dir.joinpath("b.fq")))
        self.assertEqual(records[0].qual, BINNED_33)


if __name__ == "__main__":
    ut.main(verbosity=2)
