"""Pipeline exceptions."""


class PipelineStageError(RuntimeError):
    """A run-fatal failure in planning, decomposition or compilation."""

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Pipeline failed during {stage}: {cause}")


class PipelineCancelled(RuntimeError):
    """The run was cancelled through its cancellation token."""

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"Pipeline cancelled before {stage}")
