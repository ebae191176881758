from extbf.errors import ConstructionError

def square(s):
    """Square the cell at the data pointer"""
    s.cell = s.cell * s.cell

def reset_pointer(s):
    """Move the data pointer back to the first cell"""
    s.data_ptr = 0

extensions = {
    'square': ('*', square),
    'reset-pointer': ('~', reset_pointer)
}

def make_instruction(name):
    try:
        return extensions[name]
    except KeyError:
        known = ', '.join(sorted(extensions))
        raise ConstructionError(f'unknown extension {name!r}, expected one of: {known}') from None
