"""monoidmap: total maps from keys to monoidal values, minimally encoded."""

from .monoid import Capability, Monoid
from .core import (
    MonoidMap,
    adjust,
    drop,
    empty,
    filter_keys,
    filter_values,
    filter_with_key,
    fold_with_key,
    from_list,
    from_list_with,
    from_map,
    get,
    keys,
    lookup_max,
    lookup_min,
    map_keys,
    map_keys_with,
    map_values,
    non_null,
    non_null_count,
    non_null_key,
    non_null_keys,
    null,
    null_key,
    nullify,
    partition_keys,
    partition_values,
    partition_with_key,
    set,
    singleton,
    split_at,
    take,
    to_list,
    to_map,
    values,
)
from .combinators import (
    append,
    intersection,
    intersection_with,
    intersection_with_a,
    invert,
    minus,
    minus_maybe,
    monus,
    power,
    union,
    union_with,
    union_with_a,
)
from .reduction import (
    common_prefix,
    common_suffix,
    is_prefix_of,
    is_suffix_of,
    overlap,
    strip_common_prefix,
    strip_common_suffix,
    strip_overlap,
    strip_prefix,
    strip_prefix_overlap,
    strip_suffix,
    strip_suffix_overlap,
)
from .comparison import disjoint, disjoint_by, is_submap_of, is_submap_of_by
from .instances import monoid_map_monoid
from .check import CheckResult, Diagnostic, Severity, check_map, check_monoid, validate
from .errors import CapabilityError, InvariantError, MonoidMapError
from .result import Err, Ok, Result

__all__ = [
    # Capabilities
    "Capability", "Monoid", "monoid_map_monoid",
    # Type
    "MonoidMap",
    # Construction / deconstruction
    "empty", "singleton", "from_list", "from_list_with", "from_map",
    "to_list", "to_map", "keys", "values", "fold_with_key",
    "lookup_min", "lookup_max",
    # Lookup / modification
    "get", "set", "adjust", "nullify",
    # Membership
    "null", "non_null", "null_key", "non_null_key", "non_null_keys",
    "non_null_count",
    # Slicing, filtering, partitioning, mapping
    "take", "drop", "split_at",
    "filter_values", "filter_keys", "filter_with_key",
    "partition_values", "partition_keys", "partition_with_key",
    "map_values", "map_keys", "map_keys_with",
    # Pointwise combinators
    "append", "union", "union_with", "union_with_a",
    "intersection", "intersection_with", "intersection_with_a",
    "minus", "minus_maybe", "monus", "invert", "power",
    # Prefixes / suffixes / overlap
    "is_prefix_of", "strip_prefix", "common_prefix", "strip_common_prefix",
    "is_suffix_of", "strip_suffix", "common_suffix", "strip_common_suffix",
    "overlap", "strip_prefix_overlap", "strip_suffix_overlap", "strip_overlap",
    # Comparison
    "is_submap_of", "is_submap_of_by", "disjoint", "disjoint_by",
    # Checking
    "CheckResult", "Diagnostic", "Severity", "check_map", "check_monoid", "validate",
    # Errors
    "CapabilityError", "InvariantError", "MonoidMapError",
    # Result
    "Ok", "Err", "Result",
]
