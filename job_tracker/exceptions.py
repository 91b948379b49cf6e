"""Exception types shared across the tracker"""


class JobTrackerError(Exception):
    """Base class for tracker errors"""


class StorageError(JobTrackerError):
    """The application store is unreachable or a query failed"""


class ApplicationNotFoundError(JobTrackerError):
    """No application exists with the requested ID"""

    def __init__(self, application_id: int):
        self.application_id = application_id
        super().__init__(f"Application with ID {application_id} not found")


class InsightComputationError(JobTrackerError):
    """An analyzer failed while computing a report"""
