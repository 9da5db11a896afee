"""
nearsyn API client
"""
from typing import Any, Dict, List, Optional, Union

import requests

from nearsyn.core.errors import NearSynError
from nearsyn.parser import RawUnit


class NearSynClient:
    """
    Client for a running nearsyn API server.

    Example usage:
        client = NearSynClient("http://localhost:8000")

        units = [json.load(open("contract.json"))]
        bindings = client.typescript(units)
        docs = client.markdown(units, now="2021-01-01")
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 30.0):
        """
        Initialize the client.

        Args:
            base_url: Server URL
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def health(self) -> Dict[str, Any]:
        response = requests.get(f"{self.base_url}/", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str,
              units: List[Union[Dict[str, Any], RawUnit]],
              now: Optional[str],
              bindgen_only: bool,
              duplicates: str) -> Dict[str, Any]:
        payload = {
            "units": [unit.model_dump(by_alias=True) if isinstance(unit, RawUnit) else unit
                      for unit in units],
            "now": now,
            "bindgen_only": bindgen_only,
            "duplicates": duplicates,
        }
        response = requests.post(f"{self.base_url}{endpoint}", json=payload, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not data.get("success"):
            raise NearSynError(data.get("error") or "Request failed")
        return data

    def typescript(self, units, now: Optional[str] = None,
                   bindgen_only: bool = False, duplicates: str = "overwrite") -> str:
        """
        Generate TypeScript bindings remotely.

        Raises:
            NearSynError: If the server rejected the declarations
            requests.HTTPError: On transport-level failures
        """
        return self._post("/api/ts", units, now, bindgen_only, duplicates)["output"]

    def markdown(self, units, now: Optional[str] = None,
                 bindgen_only: bool = False, duplicates: str = "overwrite") -> str:
        return self._post("/api/md", units, now, bindgen_only, duplicates)["output"]

    def contract(self, units, now: Optional[str] = None,
                 bindgen_only: bool = False, duplicates: str = "overwrite") -> Dict[str, Any]:
        return self._post("/api/contract", units, now, bindgen_only, duplicates)["contract"]
