from utils.get_endpoint import get_endpoint
from utils.response_utils import parse_body, robust_parse_text

__all__ = ["get_endpoint", "parse_body", "robust_parse_text"]
