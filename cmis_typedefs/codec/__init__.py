"""Type definition serialization.

Every codec writes UTF-8 to a caller-owned binary stream and never closes it.
"""

from .json_codec import read_from_json, write_to_json
from .xml_codec import read_from_xml, write_to_xml
from .yaml_codec import read_from_yaml, write_to_yaml

__all__ = [
    "read_from_json",
    "write_to_json",
    "read_from_xml",
    "write_to_xml",
    "read_from_yaml",
    "write_to_yaml",
]
