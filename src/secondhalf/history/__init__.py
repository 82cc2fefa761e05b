"""
Local prediction history for SecondHalf.

- `storage` is the file-backed named-slot store.
- `recorder` prepends successful predictions to the persisted list.
"""
