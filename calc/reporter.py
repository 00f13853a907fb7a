import sys

class Reporter():
    """
    report errors
    """
    def __init__(self, source = None):
        self.errors  = []
        self.section = None
        self.source  = source

    def crash(self, error):
        if self.errors:
            print("=== Error backlog ===", file=sys.stderr)

        for err in self.errors:
            print(f"[ Error ] {err}", file=sys.stderr)

        errstr = str(error)
        errstr = f"{{{self.section}}} \t| " + errstr if self.section else errstr
        print(f"[ Fatal Error ] | {errstr}", file=sys.stderr)

        position = getattr(error, "position", None)
        if self.source is not None and position is not None:
            print(f"    {self.source}", file=sys.stderr)
            # keep tabs so the caret lines up with the echoed source
            padding = "".join(c if c.isspace() else " " for c in self.source[:position])
            print(f"    {padding}^", file=sys.stderr)

        sys.exit(1)

    def log(self, error):
        self.errors.append(f"{{{self.section}}} \t| " + str(error))

    def checkpoint(self, section = None):
        self.section = section

        if self.errors:
            self.crash("error backlog at checkpoint")

class Error(Exception):
    """
    class allows to pass errors forward with all information
    """
    def __init__(self, errstr, position = None):
        super().__init__(errstr)
        self.errstr     = errstr
        self.position   = position

class LexError(Error):
    """character sequence that is not a token"""

class ParseError(Error):
    """token sequence that does not match the grammar"""
