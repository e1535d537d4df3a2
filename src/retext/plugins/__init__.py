"""
Bundled Plugins Package.

Every module in this package registers its plugins with `register_plugin` when
imported. `load_bundled` imports (or re-imports, after `clear_plugins`) all of
them, so adding a module here is enough to make its plugins available by name.
"""

import importlib
import pkgutil
import sys
from pathlib import Path

_pkg_dir = Path(__file__).parent


def load_bundled() -> int:
  """
  Imports every bundled plugin module.

  Returns:
      int: Number of modules loaded.
  """
  count = 0
  for _, module_name, _ in pkgutil.iter_modules([str(_pkg_dir)]):
    if module_name.startswith("_"):
      continue

    qualified = f"{__name__}.{module_name}"
    if qualified in sys.modules:
      # Re-running the module re-registers its plugins after a registry reset.
      importlib.reload(sys.modules[qualified])
    else:
      importlib.import_module(qualified)
    count += 1
  return count
