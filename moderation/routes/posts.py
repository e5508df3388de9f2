"""
Posts routes: authoring posts and comments, plus their moderation routes.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from ..auth import get_moderation_db, get_required_user
from ..database import get_db
from ..models.comment import Comment
from ..models.post import Post
from ..models.user import User
from ..query import ModerationQuery
from ..schemas.posts import PostCreate, PostUpdate, PostResponse, CommentCreate, CommentResponse
from .moderation import StatusFilter, build_moderation_router

router = APIRouter(prefix="/api/posts", tags=["posts"])


def get_own_post(post_id: int, db: Session, current_user: User) -> Post:
    post = db.query(Post).filter(
        Post.id == post_id,
        Post.user_id == current_user.id
    ).first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("/mine", response_model=List[PostResponse])
def get_my_posts(
    status: Optional[StatusFilter] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get the current user's posts in any moderation status."""
    query = ModerationQuery(db.query(Post).filter(Post.user_id == current_user.id))
    if status:
        query = getattr(query, status)()
    return query.order_by(Post.created_at.desc()).all()


@router.post("", response_model=PostResponse)
def create_post(
    post: PostCreate,
    db: Session = Depends(get_moderation_db),
    current_user: User = Depends(get_required_user),
):
    """Create a post; it starts out pending."""
    db_post = Post(user_id=current_user.id, **post.model_dump())
    db.add(db_post)
    db.commit()
    db.refresh(db_post)
    return db_post


@router.patch("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    update: PostUpdate,
    db: Session = Depends(get_moderation_db),
    current_user: User = Depends(get_required_user),
):
    """Edit a post (must belong to current user)."""
    post = get_own_post(post_id, db, current_user)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(post, field, value)
    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Delete a post (must belong to current user)."""
    post = get_own_post(post_id, db, current_user)
    db.delete(post)
    db.commit()
    return {"message": "Post deleted"}


@router.post("/{post_id}/comments", response_model=CommentResponse)
def create_comment(
    post_id: int,
    comment: CommentCreate,
    db: Session = Depends(get_moderation_db),
    current_user: User = Depends(get_required_user),
):
    """Comment on an approved post; the comment starts out pending."""
    post = db.get(Post, post_id)
    if not post or not post.is_approved():
        raise HTTPException(status_code=404, detail="Post not found")

    db_comment = Comment(post_id=post.id, user_id=current_user.id, body=comment.body)
    db.add(db_comment)
    db.commit()
    db.refresh(db_comment)
    return db_comment


posts_moderation_router = build_moderation_router(Post, "/api/posts", PostResponse, tags=["posts"])
comments_moderation_router = build_moderation_router(Comment, "/api/comments", CommentResponse, tags=["comments"])
