__version__ = "0.1"

from .builder import HostEncodingOption, UriBuilder, new_builder
from .charclass import ALPHA, DIGIT, HEXDIG, IPVFUTURE, PATH, PCHAR, PCT_ENCODED, QUERY_FRAGMENT, QUERY_PARAM, REG_NAME, SCHEME, SUB_DELIMS, UNRESERVED, USERINFO, ZONE_ID, CharClass, match
from .codec import decode, encode
from .errors import EncodedSlashError, UriStateError, UriSyntaxError, UriValidationError
from .hosts import check_dns_host, check_ipv6_address, check_ipvfuture, host_to_ascii, host_to_unicode
from .parse import parse
from .paths import correct_no_scheme_path, merge_paths, normalize_path, resolve
from .uri import Uri
