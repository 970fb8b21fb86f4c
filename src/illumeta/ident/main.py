from pathlib import Path
from typing import Iterable

from click import command

from .table import tabulate_metadata, write_metadata_table
from ..core import path
from ..core.arg import (CMD_IDENT,
                        arg_input_path,
                        opt_out_dir,
                        opt_keep_bad,
                        opt_force,
                        opt_num_cpus)
from ..core.ngs import parse_fastq
from ..core.run import run_func
from ..core.task import dispatch


def ident_fastq(fastq: Path, csv_file: Path, *,
                keep_bad: bool,
                force: bool):
    """ Tabulate the metadata of every read in one FASTQ file. """
    table = tabulate_metadata(parse_fastq(fastq), keep_bad=keep_bad)
    # By convention, a task returns a Path to show that it succeeded.
    return write_metadata_table(table, csv_file, force)


def ident_csv_path(out_fastq: Path):
    """ Path of the table of metadata for a FASTQ file. """
    return out_fastq.with_name(f"{path.fastq_stem(out_fastq)}{path.IDENT_EXT}")


@run_func(CMD_IDENT)
def run(input_path: Iterable[str | Path], *,
        out_dir: str | Path = opt_out_dir.default,
        keep_bad: bool = opt_keep_bad.default,
        force: bool = opt_force.default,
        num_cpus: int = opt_num_cpus.default):
    """ Tabulate the metadata in the read identifiers of FASTQ files. """
    fastqs = list(path.find_fastqs_chain(input_path))
    out_dir = path.sanitize(out_dir)
    csv_files = [ident_csv_path(out_fastq)
                 for out_fastq in path.transpaths(out_dir, fastqs)]
    return dispatch(ident_fastq,
                    num_cpus=num_cpus,
                    as_list=True,
                    ordered=True,
                    raise_on_error=False,
                    args=list(zip(fastqs, csv_files, strict=True)),
                    kwargs=dict(keep_bad=keep_bad, force=force))


params = [
    arg_input_path,
    opt_out_dir,
    opt_keep_bad,
    opt_force,
    opt_num_cpus,
]


@command(CMD_IDENT, params=params)
def cli(*args, **kwargs):
    """ Tabulate the metadata in the read identifiers of FASTQ files. """
    return run(*args, **kwargs)
