"""
Error handling utilities for the amb compiler.
"""
import re


class AmbCompileError(Exception):
    """Definition-time error with optional line numbers and hints."""
    def __init__(self, message, line_number=None, column=None, context=None, suggestion=None):
        self.message = message
        self.line_number = line_number
        self.column = column
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        super().__init__(self._format_error())

    def _format_error(self):
        """Format the error message with context and suggestion."""
        lines = ["\n❌ Compilation Error"]
        if self.line_number:
            lines.append(f" at line {self.line_number}")
            if self.column:
                lines.append(f", column {self.column}")
        lines.append(":\n")

        lines.append(f"   {self.message}\n")

        if self.context:
            lines.append(f"   > {self.context}\n")

        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}\n")

        return "".join(lines)


class AmbConfigError(Exception):
    """Raised when a run configuration file cannot be loaded."""
    def __init__(self, path, message):
        self.path = path
        self.message = message
        super().__init__(f"Invalid configuration in {path}: {message}")


def get_line_context(source_code, line_number):
    """Extract the line of code from source by line number (1-based)."""
    if not source_code or line_number is None:
        return None
    source_lines = source_code.split('\n')
    if 0 < line_number <= len(source_lines):
        return source_lines[line_number - 1].strip()
    return None


def detect_common_error_patterns(source_code):
    """Detect common mistakes and return (suggestion, error_type)."""
    open_braces = source_code.count('{')
    close_braces = source_code.count('}')
    if open_braces != close_braces:
        return f"Unmatched braces: found {open_braces} '{{' but {close_braces} '}}'", "unmatched_braces"

    open_parens = source_code.count('(')
    close_parens = source_code.count(')')
    if open_parens != close_parens:
        return f"Unmatched parentheses: found {open_parens} '(' but {close_parens} ')'", "unmatched_parens"

    if re.search(r'\brequire\s+[^(\s]', source_code):
        return "Requirements need parentheses: use 'require(condition);'", "require_without_parens"

    if re.search(r'\bchoice\s+[^(\s]', source_code):
        return "Choices need parentheses: use 'let x = choice(values);'", "choice_without_parens"

    # A statement line that runs straight into the next one
    if re.search(r'\b(let|require)\b[^;{}\n]*\n\s*(let|require|return)\b', source_code):
        return "Statements should end with ';'", "missing_semicolon"

    return None, None
