# form_model.py
from typing import Dict, Mapping


class ParameterForm:
    """
    Values typed by the user, keyed by parameter name.

    Only names the user has touched are present. Nothing is validated or
    coerced and nothing is ever removed; a new plugin gets a new form.
    """

    def __init__(self):
        self._values: Dict[str, str] = {}

    def set_value(self, name: str, value: str) -> None:
        self._values[name] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)

    def apply_submitted(self, fields: Mapping[str, str]) -> None:
        """
        Merge the fields of a posted HTML form. A field counts as touched when
        it is non-empty or was already set, since browsers post every input.
        """
        for name, value in fields.items():
            if value != "" or name in self._values:
                self.set_value(name, value)

    def get(self, name: str, default: str = "") -> str:
        return self._values.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
