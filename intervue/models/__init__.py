from .user import User
from .organization import Organization
from .requirement import Requirement, RequirementStatus
from .interviewer import Interviewer, InterviewerStatus
from .candidate import Candidate, CandidateStatus
from .interview import Interview, InterviewStatus, Feedback
from .skill import Skill
from .demo_request import DemoRequest
