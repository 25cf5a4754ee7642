def evaluate_display_text(text: str) -> int:
    """Independent evaluation using Python's own precedence rules."""
    body = text.replace("= ?", "").replace("×", "*").replace("÷", "//")
    return eval(body, {"__builtins__": {}}, {})
