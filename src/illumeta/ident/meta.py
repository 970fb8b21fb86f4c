from enum import IntEnum
from typing import NamedTuple


class Type(IntEnum):
    """ Convention of an Illumina read identifier. """
    UNDEFINED = 0
    PRE_CASAVA = 1
    CASAVA = 2

    def __str__(self):
        return self.name.lower().replace("_", "-")


class Coordinate(NamedTuple):
    """ Location of a cluster in a tile of a flow cell lane. """
    x: int = 0
    y: int = 0


class Multiplex(NamedTuple):
    """ Multiplexing tag of a read. """
    # Numeric index, or -1 if not valid.
    index: int = 0
    # Sequence of the tag, or "" if not valid.
    tag: str = ""


class Metadata(NamedTuple):
    """ Metadata of an Illumina read. The default instance (type
    UNDEFINED) stands for an identifier that could not be parsed. """
    type: Type = Type.UNDEFINED
    # Unique instrument name.
    instrument: str = ""
    # Run id, -1 if not valid.
    run: int = 0
    # Flow cell id.
    flow_cell: str = ""
    # Flow cell lane.
    lane: int = 0
    # Tile number within the flow cell lane.
    tile: int = 0
    # Coordinate of the cluster within the tile.
    coordinate: Coordinate = Coordinate()
    # Member of a pair: 1 or 2 for paired reads, 0 if unspecified.
    mate: int = 0
    # Whether the read failed the filter.
    bad_read: bool = False
    # 0 if no control bits are on, otherwise even; -1 if not valid.
    control_bits: int = 0
    multiplex: Multiplex = Multiplex()

    def to_dict(self):
        """ Flatten the metadata into a dict of scalars. """
        return {"type": str(self.type),
                "instrument": self.instrument,
                "run": self.run,
                "flow_cell": self.flow_cell,
                "lane": self.lane,
                "tile": self.tile,
                "x": self.coordinate.x,
                "y": self.coordinate.y,
                "mate": self.mate,
                "bad_read": self.bad_read,
                "control_bits": self.control_bits,
                "index": self.multiplex.index,
                "tag": self.multiplex.tag}


METADATA_FIELDS = list(Metadata().to_dict())
