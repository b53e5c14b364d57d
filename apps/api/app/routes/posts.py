"""Dashboard post routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from app.domain.access import AuthContext
from app.routes.dependencies import get_auth_context, get_post_service
from app.schemas.error import ErrorResponse, NoLeakNotFoundError
from app.schemas.post import CreatePostRequest, Post, PostList, UpdatePostRequest
from app.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])

_AUTH_RESPONSES: dict[int | str, dict] = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def create_post(
    payload: CreatePostRequest,
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.create_post(context=context, payload=payload)


@router.get("", response_model=PostList, responses=_AUTH_RESPONSES)
async def list_posts(
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> PostList:
    return service.list_posts(context=context)


@router.get(
    "/{postId}",
    response_model=Post,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def get_post(
    post_id: Annotated[str, Path(alias="postId")],
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.get_post(context=context, post_id=post_id)


@router.put(
    "/{postId}",
    response_model=Post,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def update_post(
    post_id: Annotated[str, Path(alias="postId")],
    payload: UpdatePostRequest,
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.update_post(context=context, post_id=post_id, payload=payload)


@router.delete(
    "/{postId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def delete_post(
    post_id: Annotated[str, Path(alias="postId")],
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    service.delete_post(context=context, post_id=post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
