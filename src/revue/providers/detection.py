"""Provider credential reporting."""

import os
from dataclasses import dataclass
from typing import Mapping, Sequence

from revue.config.loader import PROVIDER_KEY_VARS


@dataclass(frozen=True)
class ProviderStatus:
  """Whether a provider looks usable, and why."""

  name: str
  available: bool
  reason: str


class ProviderDetector:
  """Explains which registered providers have credentials in the environment.

  Only key presence is checked; local servers such as Ollama are listed
  but never contacted.
  """

  REPORT_ORDER = ("openai", "anthropic", "ollama")

  def __init__(self, providers: Sequence[str], env: Mapping[str, str] | None = None):
    self._providers = set(providers)
    self._env = os.environ if env is None else env

  def get_status(self) -> list[ProviderStatus]:
    """Status of every registered provider, known ones first."""
    known = [name for name in self.REPORT_ORDER if name in self._providers]
    extra = sorted(self._providers.difference(self.REPORT_ORDER))
    return [self._check(name) for name in known + extra]

  def format_error(self, failed: str) -> str:
    """Multi-line explanation for a provider that cannot be used."""
    lines = [f"Provider '{failed}' is not available.", "", "Provider status:"]
    for s in self.get_status():
      lines.append(f"  {'[ok]' if s.available else '[--]'} {s.name}: {s.reason}")
    var = PROVIDER_KEY_VARS.get(failed)
    if var:
      lines.extend(["", f"Set {var} or --ai-api-key to use {failed}."])
    return "\n".join(lines)

  def _check(self, name: str) -> ProviderStatus:
    var = PROVIDER_KEY_VARS.get(name)
    if var is None:
      return ProviderStatus(name, False, "local server, not probed")
    has_key = bool(self._env.get(var))
    return ProviderStatus(name, has_key, f"{var} {'set' if has_key else 'not set'}")
