from pathlib import Path
from typing import Iterable

from click import command

from .compress import bin_compress
from .scheme import DEFAULT_SCHEME, Scheme, load_scheme
from ..core import path
from ..core.arg import (CMD_BINQ,
                        arg_input_path,
                        opt_out_dir,
                        opt_phred_enc,
                        opt_scheme_file,
                        opt_solexa,
                        opt_force,
                        opt_num_cpus)
from ..core.logs import logger
from ..core.ngs import (FastqRecord,
                        QualSeq,
                        SolexaSeq,
                        parse_fastq,
                        write_fastq)
from ..core.run import run_func
from ..core.task import dispatch


def bin_record(record: FastqRecord,
               scheme: Scheme,
               phred_enc: int,
               solexa: bool):
    """ Bin the qualities of one FASTQ record in place. """
    if solexa:
        quals = SolexaSeq.from_str(record.qual, phred_enc)
    else:
        quals = QualSeq.from_fastq(record, phred_enc)
    bin_compress(quals, scheme)
    record.qual = quals.format_qual(phred_enc)
    return record


def binq_fastq(fastq_in: Path, fastq_out: Path, *,
               scheme: Scheme,
               phred_enc: int,
               solexa: bool,
               force: bool):
    """ Bin the qualities of every read in one FASTQ file. """
    records = (bin_record(record, scheme, phred_enc, solexa)
               for record in parse_fastq(fastq_in))
    num_reads = write_fastq(fastq_out, records, force)
    logger.routine(f"Binned qualities of {num_reads} read(s) "
                   f"from {fastq_in} into {fastq_out}")
    # By convention, a task returns a Path to show that it succeeded.
    return fastq_out


@run_func(CMD_BINQ)
def run(input_path: Iterable[str | Path], *,
        out_dir: str | Path = opt_out_dir.default,
        phred_enc: int = opt_phred_enc.default,
        scheme_file: str | Path | None = opt_scheme_file.default,
        solexa: bool = opt_solexa.default,
        force: bool = opt_force.default,
        num_cpus: int = opt_num_cpus.default):
    """ Bin the quality scores of reads in FASTQ files. """
    scheme = load_scheme(scheme_file) if scheme_file else DEFAULT_SCHEME
    fastqs = list(path.find_fastqs_chain(input_path))
    out_dir = path.sanitize(out_dir)
    out_fastqs = path.transpaths(out_dir, fastqs)
    return dispatch(binq_fastq,
                    num_cpus=num_cpus,
                    as_list=True,
                    ordered=True,
                    raise_on_error=False,
                    args=list(zip(fastqs, out_fastqs, strict=True)),
                    kwargs=dict(scheme=scheme,
                                phred_enc=phred_enc,
                                solexa=solexa,
                                force=force))


params = [
    arg_input_path,
    opt_out_dir,
    opt_phred_enc,
    opt_scheme_file,
    opt_solexa,
    opt_force,
    opt_num_cpus,
]


@command(CMD_BINQ, params=params)
def cli(*args, **kwargs):
    """ Bin the quality scores of reads in FASTQ files. """
    return run(*args, **kwargs)
