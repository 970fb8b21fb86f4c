"""

Command Core Module

========================================================================

Define the names of the commands.

"""

CMD_IDENT = "ident"
CMD_BINQ = "binq"
CMD_TEST = "test"
