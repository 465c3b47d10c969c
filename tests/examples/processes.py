"""In-memory process double."""


class FakeProcess:
    """Process replaying prepared output.

    Records the bytes fed to its stdin.
    """

    def __init__(self, stdout: bytes = b'', stderr: bytes = b'',
                 return_code: int = 0) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.return_code = return_code

        self.stdin: bytes | None = None

    def communicate(self, stdin: bytes, /) -> tuple[bytes, bytes]:
        self.stdin = stdin
        return self.stdout, self.stderr

    def wait(self) -> int:
        return self.return_code
