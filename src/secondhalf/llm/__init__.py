"""
Generative-language endpoint access for SecondHalf.

- `client` sends requests and classifies failures.
- `extractor` pulls the generated text out of the response envelope.
- `errors` defines the failure taxonomy.
"""
