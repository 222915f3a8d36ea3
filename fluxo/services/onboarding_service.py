"""
Organizer onboarding and account administration.

An organizer registration creates a blocked INSTITUTION account and a
PENDING request linked to it. Approval unblocks the account, rejection
leaves it blocked. Requests only ever move out of PENDING once.
"""
from typing import List, Optional
from fluxo.core.config import settings
from fluxo.core.logging import logger
from fluxo.core.roles import RoleEnum
from fluxo.db.models.organizer_request import RequestStatusEnum
from fluxo.db.seed import avatar_url
from fluxo.db.stores.base import AccountStore, new_id
from fluxo.schemas import OrganizerRequestOut, UserProfile
from fluxo.services.accounts import create_password_account


class OnboardingService:

    def __init__(self, store: AccountStore, legacy_recovery: Optional[bool] = None):
        """
        Args:
            store: Account store holding users and requests
            legacy_recovery: Whether approving an unlinked request may create
                an account; defaults to LEGACY_ORGANIZER_RECOVERY
        """
        self.store = store
        if legacy_recovery is None:
            legacy_recovery = settings.LEGACY_ORGANIZER_RECOVERY
        self.legacy_recovery = legacy_recovery

    async def submit_organizer_request(
        self, name: str, email: str, phone: Optional[str], password: str
    ) -> OrganizerRequestOut:
        """
        Register an organizer: blocked INSTITUTION account first, then the request.
        
        Raises:
            RegistrationError: If the password is weak or the email is taken
        """
        user = await create_password_account(
            self.store, name, email, phone, password, RoleEnum.INSTITUTION, blocked=True
        )
        request = await self.store.create_organizer_request(name, email, phone, uid=user.uid)
        logger.info(f"Organizer request {request.id} submitted for {user.uid}")
        return request

    async def get_organizer_requests(self) -> List[OrganizerRequestOut]:
        return await self.store.list_organizer_requests()

    async def approve_organizer_request(self, request_id: str) -> None:
        """
        Approve a pending request and unblock its account.
        
        Unknown or already decided requests are ignored.
        """
        request = await self.store.get_organizer_request(request_id)
        if request is None or request.status != RequestStatusEnum.PENDING:
            logger.debug(f"Ignoring approval of request {request_id}")
            return
        
        if not request.uid:
            if not self.legacy_recovery:
                logger.warning(f"Request {request_id} has no linked account and legacy recovery is disabled")
                return
            await self.store.set_organizer_request_status(request_id, RequestStatusEnum.APPROVED)
            await self.recover_legacy_request(request)
            return
        
        await self.store.set_organizer_request_status(request_id, RequestStatusEnum.APPROVED)
        user = await self.store.update_user(request.uid, {"blocked": False})
        if user is None:
            logger.warning(f"Approved request {request_id} but linked account {request.uid} does not exist")
        else:
            logger.info(f"Approved request {request_id}; account {request.uid} unblocked")

    async def recover_legacy_request(self, request: OrganizerRequestOut) -> UserProfile:
        """
        Create an unblocked INSTITUTION profile for a request that predates
        account linking. The profile has no sign-in identity.
        """
        user = UserProfile(
            uid=new_id("org"),
            name=request.name,
            email=request.email,
            role=RoleEnum.INSTITUTION,
            avatar=avatar_url(request.name),
            blocked=False,
        )
        user = await self.store.save_user(user)
        logger.warning(f"Legacy recovery: created account {user.uid} for unlinked request {request.id}")
        return user

    async def reject_organizer_request(self, request_id: str) -> None:
        """Reject a pending request. The linked account stays blocked."""
        request = await self.store.get_organizer_request(request_id)
        if request is None or request.status != RequestStatusEnum.PENDING:
            logger.debug(f"Ignoring rejection of request {request_id}")
            return
        await self.store.set_organizer_request_status(request_id, RequestStatusEnum.REJECTED)
        logger.info(f"Rejected request {request_id}")

    async def admin_get_all_users(self) -> List[UserProfile]:
        users = await self.store.list_users()
        return [u for u in users if u.role != RoleEnum.SUPER_ADMIN]

    async def admin_toggle_block_user(self, uid: str) -> Optional[UserProfile]:
        """
        Flip the blocked flag of a user.
        
        Returns None for unknown uids and for SUPER_ADMIN records, which are
        not listed by admin_get_all_users and cannot be blocked.
        """
        user = await self.store.get_user_by_id(uid)
        if user is None:
            return None
        if user.role == RoleEnum.SUPER_ADMIN:
            logger.warning(f"Refused to toggle block on administrator account {uid}")
            return None
        updated = await self.store.update_user(uid, {"blocked": not user.blocked})
        logger.info(f"Account {uid} {'blocked' if updated.blocked else 'unblocked'}")
        return updated
