"""
Profile Routes
"""

from climatrix.auth.decorators import current_user_id, login_required
from climatrix.errors import NotFound
from climatrix.extensions import db
from climatrix.models import Comment, EnvironmentalPledge, GroupMember, Post, Profile, User
from climatrix.profile import profile_bp
from climatrix.responses import success_response, validate_body
from climatrix.schemas import UpdateProfileRequest

USER_FIELDS = ('first_name', 'last_name', 'city', 'state', 'country')
PROFILE_FIELDS = ('bio', 'website', 'twitter', 'linkedin', 'phone', 'organization', 'interests')


def _current_user():
    user = db.session.get(User, current_user_id())
    if not user:
        raise NotFound('User not found')
    return user


def _activity_counts(user_id):
    return {
        'posts': Post.query.filter_by(author_id=user_id).count(),
        'comments': Comment.query.filter_by(author_id=user_id).count(),
        'pledges': EnvironmentalPledge.query.filter_by(user_id=user_id).count(),
        'groupMemberships': GroupMember.query.filter_by(user_id=user_id).count(),
    }


@profile_bp.route('')
@login_required
def get_profile():
    """The caller's account, profile and activity counts"""
    user = _current_user()
    data = user.to_dict()
    data['counts'] = _activity_counts(user.id)
    return success_response(data)


@profile_bp.route('', methods=['PATCH'])
@login_required
def update_profile():
    """Update account fields (when non-empty) and profile fields (when present)"""
    data = validate_body(UpdateProfileRequest)
    sent = data.model_dump(exclude_unset=True)
    user = _current_user()

    for field in USER_FIELDS:
        if sent.get(field):
            setattr(user, field, sent[field])

    if user.profile is None:
        user.profile = Profile(interests=[])
    for field in PROFILE_FIELDS:
        if field in sent:
            value = sent[field]
            if field == 'website' and value is not None:
                value = str(value)
            setattr(user.profile, field, value)

    db.session.commit()
    return success_response(user.to_dict(), 'Profile updated successfully')
