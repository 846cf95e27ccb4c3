def is_whitespace(token: str) -> bool:
    "True for a non-empty token made only of whitespace."
    return len(token) > 0 and token.isspace()


def inputs_equal(token_a: str, token_b: str, case_sensitive: bool) -> bool:
    """Compare two input tokens.

    Any whitespace token equals any other whitespace token, so a single space key satisfies a tab
    or a literal space in the text. Otherwise the tokens are compared exactly, or after lowercasing
    when case_sensitive is false.
    """
    if is_whitespace(token_a) or is_whitespace(token_b):
        return is_whitespace(token_a) and is_whitespace(token_b)
    if case_sensitive:
        return token_a == token_b
    return token_a.lower() == token_b.lower()
