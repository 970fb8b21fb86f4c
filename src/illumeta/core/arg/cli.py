import logging
import os
from datetime import datetime

from click import Argument, Option, Path

# System information
CWD = os.getcwd()
if (NUM_CPUS := os.cpu_count()) is None:
    logging.warning("Failed to determine CPU count: defaulting to 1")
    NUM_CPUS = 1

DEFAULT_PHRED_ENC = 33

# Input files

arg_input_path = Argument(
    ("input-path",),
    type=Path(exists=True),
    nargs=-1
)

# Input/output options

opt_out_dir = Option(
    ("--out-dir", "-o"),
    type=Path(file_okay=False),
    default=os.path.join(".", "out"),
    help="Write all output files to this directory"
)

opt_force = Option(
    ("--force/--no-force",),
    type=bool,
    default=False,
    help="Force all tasks to run, overwriting any existing output files"
)

# Resource usage options

opt_num_cpus = Option(
    ("--num-cpus",),
    type=int,
    default=NUM_CPUS,
    help="Process up to this many files simultaneously"
)

# Identifier parsing options

opt_keep_bad = Option(
    ("--keep-bad/--drop-bad",),
    type=bool,
    default=True,
    help="Keep reads whose identifiers cannot be parsed (as undefined) "
         "rather than dropping them"
)

# Quality binning options

opt_phred_enc = Option(
    ("--phred-enc",),
    type=int,
    default=DEFAULT_PHRED_ENC,
    help="Specify the quality score encoding offset of FASTQ files"
)

opt_scheme_file = Option(
    ("--scheme-file",),
    type=Path(exists=True, dir_okay=False),
    default=None,
    help="Bin qualities using the bins in this CSV file (columns "
         "min_phred and bin_phred) instead of the default bins"
)

opt_solexa = Option(
    ("--solexa/--phred",),
    type=bool,
    default=False,
    help="Interpret quality scores as Solexa scores instead of Phred scores"
)

# Logging options

opt_verbose = Option(
    ("--verbose", "-v"),
    count=True,
    help="Log more messages (-v, -vv, or -vvv) on stderr"
)

opt_quiet = Option(
    ("--quiet", "-q"),
    count=True,
    help="Log fewer messages (-q, -qq, or -qqq) on stderr"
)

opt_log = Option(
    ("--log",),
    type=Path(exists=False, dir_okay=False),
    default=os.path.join(CWD, "log", datetime.now().strftime(
        "illumeta_%Y-%m-%d_%H-%M-%S.log"
    )),
    help="Log all messages to a file"
)

opt_log_color = Option(
    ("--log-color/--log-plain",),
    type=bool,
    default=True,
    help="Log messages with or without color codes on stderr"
)

opt_exit_on_error = Option(
    ("--exit-on-error/--no-exit-on-error",),
    type=bool,
    default=False,
    help="Exit upon the first error instead of logging it and continuing"
)
