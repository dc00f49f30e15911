"""
Community Models

Groups, their members, posts and comments.
"""

from sqlalchemy import func, select

from climatrix.constants import MEMBER_ROLES
from climatrix.extensions import db
from climatrix.utils import isoformat, utcnow


class Group(db.Model):
    """Community group around a place or topic"""
    __tablename__ = 'groups'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.String(1000), nullable=False)
    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    country = db.Column(db.String(100))
    category = db.Column(db.String(100))
    is_public = db.Column(db.Boolean, default=True, nullable=False)
    created_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    created_by = db.relationship('User', backref='created_groups')
    members = db.relationship('GroupMember', backref='group', lazy=True,
                              cascade='all, delete-orphan')
    posts = db.relationship('Post', backref='group', lazy=True)

    def summary(self):
        return {'id': self.id, 'name': self.name, 'slug': self.slug}

    def member_count(self):
        stmt = select(func.count()).select_from(GroupMember).where(GroupMember.group_id == self.id)
        return db.session.scalar(stmt)

    def post_count(self):
        stmt = select(func.count()).select_from(Post).where(Post.group_id == self.id)
        return db.session.scalar(stmt)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'category': self.category,
            'isPublic': self.is_public,
            'createdAt': isoformat(self.created_at),
            'createdBy': self.created_by.summary() if self.created_by else None,
            'memberCount': self.member_count(),
            'postCount': self.post_count(),
        }

    def __repr__(self):
        return f'<Group {self.slug}>'


class GroupMember(db.Model):
    """Membership of a user in a group"""
    __tablename__ = 'group_members'
    __table_args__ = (
        db.UniqueConstraint('group_id', 'user_id', name='uq_group_member'),
    )

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey('groups.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    role = db.Column(db.Enum(*MEMBER_ROLES, name='member_role'), default='MEMBER', nullable=False)
    joined_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship('User', backref='group_memberships')

    def to_dict(self):
        return {
            'id': self.id,
            'groupId': self.group_id,
            'userId': self.user_id,
            'role': self.role,
            'joinedAt': isoformat(self.joined_at),
        }

    def __repr__(self):
        return f'<GroupMember group:{self.group_id} user:{self.user_id} {self.role}>'


class Post(db.Model):
    """Post, optionally inside a group"""
    __tablename__ = 'posts'

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey('groups.id'), index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    images = db.Column(db.JSON, default=list)
    tags = db.Column(db.JSON, default=list)
    likes = db.Column(db.Integer, default=0, nullable=False)
    views = db.Column(db.Integer, default=0, nullable=False)
    is_pinned = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    author = db.relationship('User', backref='posts')
    comments = db.relationship('Comment', backref='post', lazy=True,
                               order_by='Comment.created_at',
                               cascade='all, delete-orphan')

    def comment_count(self):
        stmt = select(func.count()).select_from(Comment).where(Comment.post_id == self.id)
        return db.session.scalar(stmt)

    def to_dict(self, include_comments=False):
        data = {
            'id': self.id,
            'groupId': self.group_id,
            'title': self.title,
            'content': self.content,
            'images': self.images or [],
            'tags': self.tags or [],
            'likes': self.likes,
            'views': self.views,
            'isPinned': self.is_pinned,
            'createdAt': isoformat(self.created_at),
            'author': self.author.summary() if self.author else None,
            'group': self.group.summary() if self.group else None,
            'commentCount': self.comment_count(),
        }
        if include_comments:
            data['comments'] = [c.to_dict() for c in self.comments]
        return data

    def __repr__(self):
        return f'<Post {self.id} {self.title!r}>'


class Comment(db.Model):
    """Comment on a post"""
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    content = db.Column(db.String(2000), nullable=False)
    likes = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    author = db.relationship('User', backref='comments')

    def to_dict(self):
        return {
            'id': self.id,
            'postId': self.post_id,
            'content': self.content,
            'likes': self.likes,
            'createdAt': isoformat(self.created_at),
            'author': self.author.summary() if self.author else None,
        }

    def __repr__(self):
        return f'<Comment {self.id} on post:{self.post_id}>'
