##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module for project-wide utility functions.
"""

from copy import deepcopy
from itertools import islice
from types import SimpleNamespace
from typing import Dict, Iterable, Iterator, Optional, TypeVar

import yaml


T = TypeVar("T")


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def take(iterable: Iterable[T], limit: Optional[int] = None) -> Iterator[T]:
    """
    Lazily cap an iterable at `limit` items. A limit of `None` or 0 means unlimited.

    Args:
        iterable: The items to take from.
        limit: The maximum number of items to yield.

    Returns:
        An iterator over at most `limit` items of `iterable`.
    """
    if not limit:
        return iter(iterable)
    return islice(iterable, limit)
