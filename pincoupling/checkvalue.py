from collections.abc import Iterable

import numpy as np


def check_type(name, value, expected_type, expected_iter_type=None, *, none_ok=False):
    """Ensure that an object is of an expected type. Optionally, if the object is
    iterable, check that each element is of a particular type.

    Parameters
    ----------
    name : str
        Description of value being checked
    value : object
        Object to check type of
    expected_type : type or Iterable of type
        type to check object against
    expected_iter_type : type or Iterable of type or None, optional
        Expected type of each element in value, assuming it is iterable. If
        None, no check will be performed.
    none_ok : bool, optional
        Whether None is allowed as a value

    """
    if none_ok and value is None:
        return

    if not isinstance(value, expected_type):
        if isinstance(expected_type, Iterable):
            names = ', '.join(t.__name__ for t in expected_type)
            msg = (f'Unable to set "{name}" to "{value}" which is not one of '
                   f'the following types: "{names}"')
        else:
            msg = (f'Unable to set "{name}" to "{value}" which is not of type "'
                   f'{expected_type.__name__}"')
        raise TypeError(msg)

    if expected_iter_type:
        for item in value:
            if not isinstance(item, expected_iter_type):
                msg = (f'Unable to set "{name}" to "{value}" since each '
                       f'item must be of type "{expected_iter_type}"')
                raise TypeError(msg)


def check_greater_than(name, value, minimum, equality=False):
    """Ensure that an object's value is greater than a given value.

    Parameters
    ----------
    name : str
        Description of the value being checked
    value : object
        Object to check
    minimum : object
        Minimum value to check against
    equality : bool, optional
        Whether equality is allowed. Defaults to False.

    """
    if equality:
        if value < minimum:
            raise ValueError(f'Unable to set "{name}" to "{value}" since it '
                             f'is less than "{minimum}"')
    elif value <= minimum:
        raise ValueError(f'Unable to set "{name}" to "{value}" since it is '
                         f'less than or equal to "{minimum}"')


def check_length(name, value, length_min, length_max=None):
    """Ensure that a sized object has length within a given range.

    Parameters
    ----------
    name : str
        Description of value being checked
    value : collections.abc.Sized
        Object to check length of
    length_min : int
        Minimum length of object
    length_max : int or None, optional
        Maximum length of object. If None, only the minimum is enforced.

    """
    n = len(value)
    if length_max is None:
        if n < length_min:
            raise ValueError(f'Unable to set "{name}" to "{value}" since it '
                             f'must be at least of length "{length_min}"')
    elif not length_min <= n <= length_max:
        raise ValueError(f'Unable to set "{name}" to "{value}" since it must '
                         f'have length between "{length_min}" and '
                         f'"{length_max}"')


def check_increasing(name: str, value, equality: bool = False):
    """Ensure that a sequence's elements are strictly or loosely increasing.

    Parameters
    ----------
    name : str
        Description of value being checked
    value : iterable
        Object to check if increasing
    equality : bool, optional
        Whether equality is allowed. Defaults to False.

    """
    diff = np.diff(value)
    if equality:
        if not np.all(diff >= 0.0):
            raise ValueError(f'Unable to set "{name}" to "{value}" since its '
                             'elements must be increasing.')
    elif not np.all(diff > 0.0):
        raise ValueError(f'Unable to set "{name}" to "{value}" since its '
                         'elements must be strictly increasing.')
