"""
Prompt construction for SecondHalf.

- `prompt_builder` renders a Match Record into the request text and body.
"""
