"""
Community Routes

Groups live under /api/community/groups, posts under /api/posts.
"""

import logging

from sqlalchemy import func, select

from climatrix.auth.decorators import current_user_id, login_required
from climatrix.community import community_bp
from climatrix.errors import Conflict, Forbidden, NotFound, ValidationFailed
from climatrix.extensions import cache, db
from climatrix.models import Comment, Group, GroupMember, Post
from climatrix.responses import paginate, success_response, validate_body, validate_query
from climatrix.schemas import (
    CreateCommentRequest, CreateGroupRequest, CreatePostRequest, GroupQuery, PostQuery,
)
from climatrix.utils import slugify

logger = logging.getLogger(__name__)


# --- Groups ---

def list_public_groups(query):
    stmt = select(Group).where(Group.is_public.is_(True))
    if query.city:
        stmt = stmt.where(func.lower(Group.city) == query.city.lower())
    if query.category:
        stmt = stmt.where(Group.category == query.category)
    stmt = stmt.order_by(Group.created_at.desc(), Group.id.desc())

    groups, meta = paginate(stmt, query.page, query.limit)
    return {'groups': [g.to_dict() for g in groups], 'meta': meta}


def get_public_group(slug):
    group = Group.query.filter_by(slug=slug).first()
    if not group or not group.is_public:
        raise NotFound('Group not found')
    return group.to_dict()


@community_bp.route('/community/groups')
def list_groups():
    """Public groups, newest first"""
    query = validate_query(GroupQuery)
    cache_key = f"groups:list:{(query.city or 'all').lower()}:{query.category or 'all'}:{query.page}:{query.limit}"

    data, hit = cache.remember(cache_key, 'medium', lambda: list_public_groups(query))
    return success_response(data, cache_hit=hit)


@community_bp.route('/community/groups', methods=['POST'])
@login_required
def create_group():
    """Create a group; the creator becomes its first ADMIN member"""
    data = validate_body(CreateGroupRequest)
    slug = slugify(data.name)
    if not slug:
        raise ValidationFailed.for_field('name', 'Name must contain letters or numbers')

    if Group.query.filter_by(slug=slug).first():
        raise Conflict('A group with this name already exists')

    user_id = current_user_id()
    group = Group(slug=slug, created_by_id=user_id, **data.field_values())
    group.members.append(GroupMember(user_id=user_id, role='ADMIN'))
    db.session.add(group)
    db.session.commit()

    cache.invalidate('groups')
    logger.info('Group %s created by user %s', group.slug, user_id)
    return success_response(group.to_dict(), 'Group created successfully', status=201)


@community_bp.route('/community/groups/<slug>')
def get_group(slug):
    data, hit = cache.remember(f'groups:{slug}', 'medium', lambda: get_public_group(slug))
    return success_response(data, cache_hit=hit)


@community_bp.route('/community/groups/<int:group_id>/join', methods=['POST'])
@login_required
def join_group(group_id):
    group = db.get_or_404(Group, group_id, description='Group not found')
    if not group.is_public:
        raise NotFound('Group not found')
    user_id = current_user_id()

    if GroupMember.query.filter_by(group_id=group.id, user_id=user_id).first():
        raise Conflict('You are already a member of this group')

    membership = GroupMember(group_id=group.id, user_id=user_id, role='MEMBER')
    db.session.add(membership)
    db.session.commit()

    cache.invalidate('groups')
    return success_response(membership.to_dict(), f'Joined {group.name}', status=201)


# --- Posts ---

def visible_post_clause():
    """Posts outside any group or inside a public one"""
    public_groups = select(Group.id).where(Group.is_public.is_(True))
    return Post.group_id.is_(None) | Post.group_id.in_(public_groups)


def get_visible_post(post_id):
    post = db.get_or_404(Post, post_id, description='Post not found')
    if post.group and not post.group.is_public:
        raise NotFound('Post not found')
    return post


def list_posts_page(query):
    stmt = select(Post).where(visible_post_clause())
    if query.group_id:
        stmt = stmt.where(Post.group_id == query.group_id)
    stmt = stmt.order_by(Post.is_pinned.desc(), Post.created_at.desc(), Post.id.desc())

    posts, meta = paginate(stmt, query.page, query.limit)
    return {'posts': [p.to_dict() for p in posts], 'meta': meta}


@community_bp.route('/posts')
def list_posts():
    """Posts, pinned first then newest, optionally within one group"""
    query = validate_query(PostQuery)
    cache_key = f"posts:list:{query.group_id or 'all'}:{query.page}:{query.limit}"

    data, hit = cache.remember(cache_key, 'short', lambda: list_posts_page(query))
    return success_response(data, cache_hit=hit)


@community_bp.route('/posts', methods=['POST'])
@login_required
def create_post():
    """Create a post; posting into a group requires membership"""
    data = validate_body(CreatePostRequest)
    user_id = current_user_id()

    if data.group_id is not None:
        group = db.session.get(Group, data.group_id)
        if not group:
            raise NotFound('Group not found')
        if not GroupMember.query.filter_by(group_id=group.id, user_id=user_id).first():
            raise Forbidden('You must be a member of this group to post')

    post = Post(
        group_id=data.group_id,
        author_id=user_id,
        title=data.title,
        content=data.content,
        images=[str(url) for url in data.images],
        tags=data.tags,
    )
    db.session.add(post)
    db.session.commit()

    cache.invalidate('posts')
    cache.invalidate('groups')
    return success_response(post.to_dict(), 'Post created successfully', status=201)


@community_bp.route('/posts/<int:post_id>')
def get_post(post_id):
    post = get_visible_post(post_id)
    return success_response(post.to_dict(include_comments=True))


@community_bp.route('/posts/<int:post_id>/comments', methods=['POST'])
@login_required
def add_comment(post_id):
    data = validate_body(CreateCommentRequest)
    post = get_visible_post(post_id)

    comment = Comment(post_id=post.id, author_id=current_user_id(), content=data.content)
    db.session.add(comment)
    db.session.commit()

    cache.invalidate('posts')
    return success_response(comment.to_dict(), 'Comment added', status=201)
