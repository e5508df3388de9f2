from moderation.actor import Actor, bind_actor
from moderation.auth import get_password_hash
from moderation.database import SessionLocal, engine, Base
from moderation.models import Comment, Post, User

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear existing data
db.query(Comment).delete()
db.query(Post).delete()
db.query(User).delete()
db.commit()

author = User(
    email="author@example.com",
    hashed_password=get_password_hash("authorpassword"),
    display_name="Author",
)
moderator = User(
    email="moderator@example.com",
    hashed_password=get_password_hash("moderatorpassword"),
    display_name="Moderator",
    is_moderator=True,
)
db.add_all([author, moderator])
db.commit()

# Sample posts, authored as the author
bind_actor(db, Actor(id=author.id))
posts = [
    Post(user_id=author.id, title="Hello", content="First post, waiting for review."),
    Post(user_id=author.id, title="Launch notes", content="What shipped this week."),
    Post(user_id=author.id, title="Buy now!!!", content="Totally legitimate offer."),
    Post(user_id=author.id, title="Draft thoughts", content="Needs another look later."),
]
db.add_all(posts)
db.commit()

# Moderate them as the moderator
bind_actor(db, Actor(id=moderator.id))
posts[1].mark_approved(db)
posts[2].mark_rejected(db)
posts[3].mark_postponed(db)

bind_actor(db, Actor(id=author.id))
db.add(Comment(post_id=posts[1].id, user_id=author.id, body="Happy to answer questions."))
db.commit()

db.close()

print("Database seeded successfully!")
