from cdcp.domain.user.value_objects.user_attribute import UserAttribute
from cdcp.domain.user.value_objects.verification_status import VerificationStatus

__all__ = ["UserAttribute", "VerificationStatus"]
