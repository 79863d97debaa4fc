__version__ = "0.1"

from .authority import Authority, parse_authority
from .codec import Encoding, UriComponent, decode_component, encode_component, filter_component, to_rfc1738
from .datapath import DataPath, parse_data_path
from .domain import Domain, parse_domain
from .errors import OffsetOutOfBounds, UriSyntaxError
from .fragment import Fragment, parse_fragment
from .hierarchical_path import HierarchicalPath, parse_hierarchical_path
from .host import Host, HostKind, classify_host, parse_host
from .ipv4 import Calculator, DecimalCalculator, IPv4Normalizer, NativeCalculator
from .path import Path, parse_path, remove_dot_segments
from .port import Port, parse_port
from .query import Query, parse_query
from .query_string import DEFAULT_SEPARATOR, build_pairs, extract_parameters, pairs_from_parameters, parse_pairs
from .scheme import SCHEME_DEFAULT_PORTS, Scheme, SchemeCache, parse_scheme
from .userinfo import UserInfo, parse_user_info
