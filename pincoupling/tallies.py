"""Energy deposition tallies for the materials touched by the ring mapping"""

__all__ = ["material_indices", "init_tallies"]


def material_indices(cells):
    """Zero-based material index of each cell instance, in registry order

    Parameters
    ----------
    cells : iterable of pincoupling.abc.CellInstance
        Registered cell instances

    Returns
    -------
    list of int
        Material indices

    """
    return [c.material_index - 1 for c in cells]


def init_tallies(transport):
    """Request heat deposition tallies for every registered cell instance.

    Does nothing on processes that do not take part in the transport solve.

    Parameters
    ----------
    transport : pincoupling.abc.TransportDriver
        Transport driver whose cell registry has been populated

    """
    if transport.active:
        transport.create_tallies(material_indices(transport.cells))
