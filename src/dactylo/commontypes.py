class DactyloError(Exception):
    pass


class SequenceRemovedError(DactyloError):
    def __init__(self, sequence):
        self.sequence = sequence
        return super().__init__(f"{sequence!r} has been removed")


class SequenceNotRegisteredError(DactyloError):
    def __init__(self, sequence):
        self.sequence = sequence
        return super().__init__(f"{sequence!r} is not registered with this registry")
