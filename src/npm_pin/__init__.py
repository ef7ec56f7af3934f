"""npm-pin core package.

Resolves the installed version of every dependency declared in a project's
package.json by inspecting node_modules, and renders a pinned excerpt.
"""

__version__ = "0.1.0"

__all__ = [
    "core",
]
