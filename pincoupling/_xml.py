def clean_indentation(element, level=0, spaces_per_level=2):
    """Set indentation of XML element and its sub-elements.

    Parameters
    ----------
    element : lxml.etree._Element
        Element to indent in place
    level : int
        Indentation level for the element passed in (default 0)
    spaces_per_level : int
        Number of spaces per indentation level (default 2)

    """
    i = "\n" + level * spaces_per_level * " "

    if len(element):
        if not element.text or not element.text.strip():
            element.text = i + spaces_per_level * " "
        if not element.tail or not element.tail.strip():
            element.tail = i
        for sub_element in element:
            clean_indentation(sub_element, level + 1, spaces_per_level)
        if not sub_element.tail or not sub_element.tail.strip():
            sub_element.tail = i
    elif level and (not element.tail or not element.tail.strip()):
        element.tail = i


def get_text(elem, name, default=None):
    """Retrieve text of an attribute or subelement.

    Parameters
    ----------
    elem : lxml.etree._Element
        Element from which to search
    name : str
        Name of attribute/subelement
    default : object
        A default value to return if no matching attribute/subelement exists

    Returns
    -------
    str
        Text of attribute or subelement

    """
    if name in elem.attrib:
        return elem.get(name, default)
    else:
        child = elem.find(name)
        return child.text if child is not None else default


def get_elem_list(elem, name, dtype=float):
    """Read a whitespace-separated list of values from a subelement

    Parameters
    ----------
    elem : lxml.etree._Element
        XML element that should contain the list
    name : str
        Name of the subelement to obtain the list from
    dtype : data-type
        The type of each element in the list

    Returns
    -------
    list of dtype or None
        Data read from the subelement, or None if it is absent

    """
    text = get_text(elem, name)
    if text is not None:
        return [dtype(x) for x in text.split()]
