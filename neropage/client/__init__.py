from neropage.client.api_client import ApiError, CsrfTokenHolder, NeropageClient
from neropage.client.reorder import array_move, build_reorder_payload

__all__ = ["ApiError", "CsrfTokenHolder", "NeropageClient", "array_move", "build_reorder_payload"]
