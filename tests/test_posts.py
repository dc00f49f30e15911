import math

from climatrix.extensions import db
from climatrix.models import Post

POST = {
    'title': 'Tree planting this weekend',
    'content': 'Join us at the park on Saturday morning, saplings provided.',
    'tags': ['trees', 'event'],
}


def make_group(client):
    r = client.post('/api/community/groups', json={
        'name': 'Delhi Green Warriors',
        'description': 'Local air quality and urban forestry action in Delhi.',
    })
    return r.get_json()['data']['id']


def test_create_post_requires_login(app, client):
    assert client.post('/api/posts', json=POST).status_code == 401
    with app.app_context():
        assert Post.query.count() == 0


def test_create_post_without_group(user_client, user_id):
    r = user_client.post('/api/posts', json=dict(POST, images=['https://img.example.com/a.png']))
    assert r.status_code == 201
    data = r.get_json()['data']
    assert data['group'] is None
    assert data['author']['id'] == user_id
    assert data['images'] == ['https://img.example.com/a.png']
    assert data['tags'] == ['trees', 'event']
    assert data['commentCount'] == 0


def test_posting_into_group_requires_membership(app, user_client, other_client):
    group_id = make_group(user_client)

    r = other_client.post('/api/posts', json=dict(POST, groupId=group_id))
    assert r.status_code == 403
    assert r.get_json()['message'] == 'You must be a member of this group to post'

    r = other_client.post('/api/posts', json=dict(POST, groupId=999))
    assert r.status_code == 404

    r = user_client.post('/api/posts', json=dict(POST, groupId=group_id))
    assert r.status_code == 201
    assert r.get_json()['data']['group']['id'] == group_id

    with app.app_context():
        assert Post.query.count() == 1


def test_post_validation(user_client):
    r = user_client.post('/api/posts', json={'title': 'Hi', 'content': 'short'})
    assert r.status_code == 400
    fields = {e['field'] for e in r.get_json()['errors']}
    assert fields == {'title', 'content'}

    r = user_client.post('/api/posts', json=dict(POST, images=['not a url']))
    assert r.status_code == 400


def test_list_posts_pinned_first(app, user_client, client):
    ids = [user_client.post('/api/posts', json=dict(POST, title=f'Post number {i}')).get_json()['data']['id']
           for i in range(3)]
    with app.app_context():
        db.session.get(Post, ids[0]).is_pinned = True
        db.session.commit()

    r = client.get('/api/posts')
    assert r.status_code == 200
    data = r.get_json()['data']
    assert [p['id'] for p in data['posts']] == [ids[0], ids[2], ids[1]]
    assert data['meta']['total'] == 3


def test_list_posts_by_group_and_invalidation(user_client, client):
    group_id = make_group(user_client)
    user_client.post('/api/posts', json=POST)

    r = client.get(f'/api/posts?groupId={group_id}')
    assert r.headers['X-Cache'] == 'MISS'
    assert r.get_json()['data']['posts'] == []
    assert client.get(f'/api/posts?groupId={group_id}').headers['X-Cache'] == 'HIT'

    user_client.post('/api/posts', json=dict(POST, groupId=group_id))

    r = client.get(f'/api/posts?groupId={group_id}')
    assert r.headers['X-Cache'] == 'MISS'
    assert len(r.get_json()['data']['posts']) == 1


def test_post_detail_and_comments(user_client, other_client, client):
    post_id = user_client.post('/api/posts', json=POST).get_json()['data']['id']

    assert client.post(f'/api/posts/{post_id}/comments', json={'content': 'Nice'}).status_code == 401
    r = other_client.post(f'/api/posts/{post_id}/comments', json={'content': 'Count me in!'})
    assert r.status_code == 201
    user_client.post(f'/api/posts/{post_id}/comments', json={'content': 'See you there.'})

    r = client.get(f'/api/posts/{post_id}')
    assert r.status_code == 200
    data = r.get_json()['data']
    assert data['commentCount'] == 2
    assert [c['content'] for c in data['comments']] == ['Count me in!', 'See you there.']
    assert data['comments'][0]['author']['username'] == 'other'

    assert client.get('/api/posts/999').status_code == 404
    assert other_client.post('/api/posts/999/comments', json={'content': 'Hello'}).status_code == 404


def test_private_group_posts_are_hidden(user_client, other_client, client):
    r = user_client.post('/api/community/groups', json={
        'name': 'Secret Circle',
        'description': 'Planning for members only, not listed anywhere.',
        'isPublic': False,
    })
    group_id = r.get_json()['data']['id']
    hidden = user_client.post('/api/posts', json=dict(POST, groupId=group_id))
    assert hidden.status_code == 201
    hidden_id = hidden.get_json()['data']['id']
    shown_id = user_client.post('/api/posts', json=POST).get_json()['data']['id']

    data = client.get('/api/posts').get_json()['data']
    assert [p['id'] for p in data['posts']] == [shown_id]
    assert data['meta']['total'] == 1
    assert client.get(f'/api/posts?groupId={group_id}').get_json()['data']['posts'] == []

    assert client.get(f'/api/posts/{hidden_id}').status_code == 404
    r = other_client.post(f'/api/posts/{hidden_id}/comments', json={'content': 'Found it'})
    assert r.status_code == 404


def test_post_pagination_meta(user_client, client):
    for i in range(5):
        user_client.post('/api/posts', json=dict(POST, title=f'Post number {i}'))

    limit = 2
    for page in (1, 2, 3):
        data = client.get(f'/api/posts?page={page}&limit={limit}').get_json()['data']
        meta = data['meta']
        assert meta['total'] == 5
        assert meta['totalPages'] == math.ceil(5 / limit)
        assert page * limit <= meta['total'] + limit
        assert len(data['posts']) == (1 if page == 3 else 2)
