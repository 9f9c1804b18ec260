"""Reconcile OAuth provider identities with local user accounts."""

import logging

from reach_identity.application.dtos import OAuthProfile
from reach_identity.domain.shared.time import utc_now
from reach_identity.domain.user import (
    AuthProvider,
    Email,
    InvalidEmailError,
    User,
    UserRepository,
)

logger = logging.getLogger(__name__)

FACEBOOK_AVATAR_URL = "https://graph.facebook.com/{external_id}/picture?type=large"


class IdentityResolver:
    """Link or create the local user behind an OAuth profile.

    The account already holding the provider's external id wins, so a
    provider which withholds the email, or reveals it only later, keeps
    mapping back to the same account. Otherwise an account with a matching
    email is linked. Linking only ever adds the current provider's id;
    other provider links and the local password are left alone.
    """

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def resolve(self, profile: OAuthProfile) -> User:
        """
        Return the user for ``profile``, creating one if needed.

        Parameters
        ----------
        profile
            Profile reported by the provider after the code exchange

        Returns
        -------
        The linked or newly created user, with ``last_login_at`` stamped
        """
        provider = AuthProvider(profile.provider)
        email = _parse_email(profile.email)

        owner = await self._user_repo.find_by_provider_id(
            provider,
            profile.external_id,
        )
        user = owner
        if email is not None:
            by_email = await self._user_repo.find_by_email(email)
            if owner is None:
                user = by_email
            elif by_email is not None and by_email.id != owner.id:
                logger.warning(
                    "%s id already linked to user %s, not linking it to %s",
                    provider.value,
                    owner.id,
                    by_email.id,
                )

        if user is not None:
            user.link_provider(provider, profile.external_id)
            logger.info("Linked %s account to user: %s", provider.value, user.id)
        else:
            user = User.create_from_provider(
                provider=provider,
                external_id=profile.external_id,
                email=email,
                name=profile.display_name,
                avatar_url=_avatar_url(profile),
            )
            logger.info("Created user %s from %s profile", user.id, provider.value)

        user.record_login(utc_now())
        await self._user_repo.save(user)
        return user


def _parse_email(value: str | None) -> Email | None:
    if not value:
        return None
    try:
        return Email(value)
    except InvalidEmailError:
        logger.warning("Ignoring malformed email from OAuth provider")
        return None


def _avatar_url(profile: OAuthProfile) -> str | None:
    if profile.avatar_url:
        return profile.avatar_url
    if profile.provider == AuthProvider.FACEBOOK:
        return FACEBOOK_AVATAR_URL.format(external_id=profile.external_id)
    return None
