import re

from pydantic import BaseModel, ConfigDict

_SLOT = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    """A versioned prompt template.

    ``template`` and ``system`` may contain ``{{ name }}`` slots; every slot
    must be declared in ``inputs``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    version: str
    description: str
    inputs: dict[str, str] = {}
    system: str = ""
    template: str

    def render(self, **values: str) -> str:
        return self._fill(self.template, values)

    def render_system(self, **values: str) -> str:
        return self._fill(self.system, values)

    def _fill(self, text: str, values: dict[str, str]) -> str:
        missing = set(self.inputs) - set(values)
        if missing:
            raise KeyError(
                f"Prompt '{self.name}' missing inputs: {', '.join(sorted(missing))}"
            )

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in self.inputs:
                return match.group(0)
            return str(values[key])

        return _SLOT.sub(substitute, text)
