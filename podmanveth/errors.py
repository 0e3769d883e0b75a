class LinkLookupError(LookupError):
    """No unique link matched the requested index"""
    def __init__(self, index: int, matches: int):
        self.index = index
        self.matches = matches
        if matches == 0:
            msg = f"no veth interface with index {index}"
        else:
            msg = f"index {index} matches {matches} veth interfaces"
        super().__init__(msg)


class ResolutionError(RuntimeError):
    """
    A correlation step failed.
    `container_id` is None for host level steps (listing containers or host links).
    `returncode` carries the exit status of the failing command, when there was one.
    """
    def __init__(self,
                 container_id: str | None,
                 step: str,
                 message: str,
                 returncode: int = 1):
        self.container_id = container_id
        self.step = step
        self.message = message
        self.returncode = returncode
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.container_id is None:
            return f"{self.step}: {self.message}"
        return f"container {self.container_id}: {self.step}: {self.message}"


class UnexpectedOutputError(ValueError):
    """A runtime query printed something that could not be parsed"""
