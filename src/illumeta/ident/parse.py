"""

Identifier Parsing Module

========================================================================

Parse the metadata in the identifiers of Illumina reads, which follow
one of two conventions.

Before Casava 1.8 (pre-Casava), all metadata are in the name::

    @HWUSI-EAS100R:6:73:941:1973#0/1

    HWUSI-EAS100R   unique instrument name
    6               flow cell lane
    73              tile number within the flow cell lane
    941             x-coordinate of the cluster within the tile
    1973            y-coordinate of the cluster within the tile
    #0              index number of a multiplexed sample (0 for none)
    /1              member of a pair, /1 or /2 (paired reads only)

Since Casava 1.8, metadata are in the name and the description::

    @EAS139:136:FC706VJ:2:2104:15343:197393 1:Y:18:ATCACG

    EAS139          unique instrument name
    136             run id
    FC706VJ         flow cell id
    2               flow cell lane
    2104            tile number within the flow cell lane
    15343           x-coordinate of the cluster within the tile
    197393          y-coordinate of the cluster within the tile
    1               member of a pair, 1 or 2 (paired reads only)
    Y               Y if the read failed the filter, N otherwise
    18              0 if no control bits are on, otherwise even
    ATCACG          index sequence

"""

import re
from typing import Protocol

from .meta import Coordinate, Metadata, Multiplex, Type
from ..core.seq import is_dna_tag

PRE_CASAVA_MARK = "#"
PRE_CASAVA_SEPS = re.compile("[:#/]")
CASAVA_SEP = ":"
PRE_CASAVA_MIN_FIELDS = 6
PRE_CASAVA_MAX_FIELDS = 7
CASAVA_NAME_FIELDS = 7
CASAVA_DESC_FIELDS = 4
BAD_READ_FLAGS = frozenset({"Y", "y"})
INTEGER_PATTERN = re.compile("[+-]?[0-9]+")


class IdentifierError(ValueError):
    """ A read identifier cannot be parsed. """


class BadIdentifierError(IdentifierError):
    """ A read identifier does not follow either convention. """


class BadTagError(IdentifierError):
    """ A multiplex tag contains characters other than DNA bases. """


class ReadIdentifier(Protocol):
    """ Anything with the name and description of a read. """
    name: str
    description: str


class Identifier(object):
    """ Name and description of a read as plain strings. """
    __slots__ = ["name", "description"]

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description


def split_fields(text: str, seps: re.Pattern | str):
    """ Split text at separators, omitting empty fields. """
    if isinstance(seps, str):
        fields = text.split(seps)
    else:
        fields = seps.split(text)
    return [field for field in fields if field]


def parse_int(field: str):
    """ Parse an integer field; an empty field means -1. """
    if not field:
        return -1
    if not INTEGER_PATTERN.fullmatch(field):
        raise ValueError(f"Invalid integer: {repr(field)}")
    return int(field)


def parse_pre_casava(name: str):
    """ Parse the name of a read in the pre-Casava convention. """
    fields = split_fields(name, PRE_CASAVA_SEPS)
    if len(fields) < PRE_CASAVA_MIN_FIELDS:
        raise BadIdentifierError(
            f"Pre-Casava name {repr(name)} has {len(fields)} fields, "
            f"but needs at least {PRE_CASAVA_MIN_FIELDS}"
        )
    try:
        lane, tile, x, y = map(parse_int, fields[1: 5])
    except ValueError as error:
        raise BadIdentifierError(
            f"Pre-Casava name {repr(name)} has a non-numeric field: {error}"
        ) from None
    tag = fields[5]
    try:
        multiplex = Multiplex(index=parse_int(tag), tag="")
    except ValueError:
        # The field is not an index, so it must be a sequence.
        if not is_dna_tag(tag):
            raise BadTagError(
                f"Multiplex tag {repr(tag)} of {repr(name)} is neither "
                f"an integer nor a DNA sequence"
            ) from None
        multiplex = Multiplex(index=-1, tag=tag)
    # The mate is read only from exactly the 7th and last field.
    if len(fields) == PRE_CASAVA_MAX_FIELDS:
        try:
            mate = parse_int(fields[6])
        except ValueError as error:
            raise BadIdentifierError(
                f"Pre-Casava name {repr(name)} has a non-numeric mate: {error}"
            ) from None
    else:
        mate = 0
    return Metadata(type=Type.PRE_CASAVA,
                    instrument=fields[0],
                    run=-1,
                    lane=lane,
                    tile=tile,
                    coordinate=Coordinate(x, y),
                    mate=mate,
                    control_bits=-1,
                    multiplex=multiplex)


def parse_casava(name: str, description: str):
    """ Parse the name and description of a read in the Casava 1.8+
    convention; the description may be empty. """
    name_fields = split_fields(name, CASAVA_SEP)
    desc_fields = split_fields(description, CASAVA_SEP)
    if len(name_fields) != CASAVA_NAME_FIELDS:
        raise BadIdentifierError(
            f"Casava name {repr(name)} has {len(name_fields)} fields, "
            f"but needs {CASAVA_NAME_FIELDS}"
        )
    if description and len(desc_fields) != CASAVA_DESC_FIELDS:
        raise BadIdentifierError(
            f"Casava description {repr(description)} has {len(desc_fields)} "
            f"fields, but needs {CASAVA_DESC_FIELDS} (or none)"
        )
    # Check the tag first so that a bad tag takes precedence over any
    # other malformed field.
    if description and not is_dna_tag(desc_fields[3]):
        raise BadTagError(f"Multiplex tag {repr(desc_fields[3])} of "
                          f"{repr(description)} is not a DNA sequence")
    instrument, run, flow_cell, lane, tile, x, y = name_fields
    try:
        metadata = Metadata(type=Type.CASAVA,
                            instrument=instrument,
                            run=parse_int(run),
                            flow_cell=flow_cell,
                            lane=parse_int(lane),
                            tile=parse_int(tile),
                            coordinate=Coordinate(parse_int(x), parse_int(y)),
                            control_bits=-1,
                            multiplex=Multiplex(index=-1, tag=""))
        if description:
            mate, bad_read, control_bits, tag = desc_fields
            metadata = metadata._replace(
                mate=parse_int(mate),
                bad_read=bad_read in BAD_READ_FLAGS,
                control_bits=parse_int(control_bits),
                multiplex=Multiplex(index=-1, tag=tag)
            )
    except ValueError as error:
        raise BadIdentifierError(
            f"Casava identifier {repr(name)} {repr(description)} has a "
            f"non-numeric field: {error}"
        ) from None
    return metadata


def parse(record: ReadIdentifier):
    """ Parse the metadata in the name and description of a read.

    Parameters
    ----------
    record: ReadIdentifier
        Read with attributes `name` and `description`. If the name has
        a '#', it is parsed as pre-Casava (ignoring the description);
        otherwise, as Casava 1.8+.

    Returns
    -------
    Metadata
        Metadata of the read.

    Raises
    ------
    BadIdentifierError
        The identifier has the wrong number of fields or a non-numeric
        value in a numeric field.
    BadTagError
        The multiplex tag has characters other than DNA bases.
    """
    name = record.name
    if PRE_CASAVA_MARK in name:
        return parse_pre_casava(name)
    return parse_casava(name, record.description)


def parse_ident(name: str, description: str = ""):
    """ Parse the metadata in a name and description given as text. """
    return parse(Identifier(name, description))


def parse_safely(record: ReadIdentifier):
    """ Parse the metadata of a read, returning the metadata and None if
    successful, otherwise undefined metadata and the error. """
    try:
        return parse(record), None
    except IdentifierError as error:
        return Metadata(), error
