from typing import Union


class MiraEngineException(Exception):
    pass

class MalformedInputFileException(MiraEngineException):
    def __init__(self, path: str, line_number: Union[int, None], reason: str):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        location = path if line_number is None else f"{path} (line {line_number})"
        super().__init__(f"Unable to parse \"{location}\": {reason}")
