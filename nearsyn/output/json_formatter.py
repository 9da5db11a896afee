"""
JSON output formatter for contract models.
Describes the exported contract surface with an integrity hash of its bindings.
"""

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from nearsyn.core import attributes
from nearsyn.core.config import GENERATOR_NAME, GENERATOR_VERSION
from nearsyn.core.contract import ContractModel
from nearsyn.core.models import ImplDeclaration
from nearsyn.generators.typescript import generate_typescript, ts_item
from nearsyn.translators.signatures import project_signature


class ContractJSONFormatter:
    """
    Formats a completed contract model as structured JSON.
    """

    SCHEMA_VERSION = "1.0.0"

    def __init__(self, model: ContractModel, sources: Optional[List[str]] = None, now: Optional[str] = None):
        """
        Initialize formatter.

        Args:
            model: Contract model, fully pushed
            sources: Paths of the units the model was built from
            now: Timestamp text; current UTC time when None, omitted when empty
        """
        self.model = model
        self.sources = sources or []
        self.now = now

    def method_entry(self, name: str) -> Dict[str, Any]:
        method, decl = self.model.methods[name]
        signature = project_signature(method)

        return {
            "name": name,
            "kind": attributes.method_kind(method),
            "interface": decl.interface,
            "signature": signature.render(),
            "args": [{"name": arg, "type": ty} for arg, ty in signature.args],
            "return_type": None if signature.is_init else signature.return_type,
            "payable": attributes.is_payable(method),
            "docs": [line.strip() for line in self.model.method_docs(method, decl)],
        }

    def types(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": item.name,
                "kind": type(item).__name__,
                "definition": "\n".join(ts_item(item, self.model)).strip(),
            }
            for item in self.model.items
            if not isinstance(item, ImplDeclaration)
        ]

    def generate(self) -> Dict[str, Any]:
        """
        Generate the complete JSON output structure.

        Returns:
            Dictionary representing the JSON structure
        """
        model = self.model
        bindings = generate_typescript(model)

        metadata = {
            "generator": f"{GENERATOR_NAME}-{GENERATOR_VERSION}",
            "sources": self.sources,
        }
        if self.now is None:
            metadata["timestamp"] = datetime.now(timezone.utc).isoformat()
        elif self.now:
            metadata["timestamp"] = self.now

        return {
            "schema_version": self.SCHEMA_VERSION,
            "metadata": metadata,
            "contract": {
                "name": model.name,
                "interfaces": list(dict.fromkeys(model.interfaces)),
                "methods": {
                    "init": [self.method_entry(name) for name in model.init_methods],
                    "view": [self.method_entry(name) for name in model.view_methods],
                    "change": [self.method_entry(name) for name in model.change_methods],
                },
                "types": self.types(),
            },
            "summary": {
                "total_methods": len(model.methods),
                "init": len(model.init_methods),
                "view": len(model.view_methods),
                "change": len(model.change_methods),
                "bindings_hash": hashlib.sha256(bindings.encode("utf-8")).hexdigest(),
            },
        }

    def to_json_string(self, indent: int = 2) -> str:
        """
        Generate JSON string.

        Args:
            indent: Number of spaces for indentation

        Returns:
            Formatted JSON string
        """
        return json.dumps(self.generate(), indent=indent)
