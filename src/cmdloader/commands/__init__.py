"""Built-in command modules, the default loader root.

Each module is loaded by file path, not imported as part of this
package.
"""
