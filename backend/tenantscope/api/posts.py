from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.exc import IntegrityError

from tenantscope.api.dependencies import get_scoped_client
from tenantscope.schemas.posts import POST_ID_MAX, BulkCreateResult, PostCreate, PostRead, PostUpdate
from tenantscope.tenancy.dependencies import require_tenant
from tenantscope.tenancy.scoping import TenantScopedClient


router = APIRouter(tags=["posts"], dependencies=[Depends(require_tenant)])

PostId = Annotated[int, Path(ge=1, le=POST_ID_MAX)]


def _conflict() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Unable to save post")


@router.get("/posts", response_model=list[PostRead])
def list_posts_endpoint(
    skip: int = Query(0, ge=0),
    take: Optional[int] = Query(None, ge=0),
    client: TenantScopedClient = Depends(get_scoped_client),
):
    return client.post.find_many(order_by={"id": "asc"}, skip=skip, take=take)


@router.get("/posts/{post_id}", response_model=PostRead)
def get_post_endpoint(post_id: PostId, client: TenantScopedClient = Depends(get_scoped_client)):
    return client.post.find_unique_or_throw({"id": post_id})


@router.post("/posts", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post_endpoint(payload: PostCreate, client: TenantScopedClient = Depends(get_scoped_client)):
    try:
        return client.post.create(payload.model_dump())
    except IntegrityError as exc:
        raise _conflict() from exc


@router.post("/posts/bulk", response_model=BulkCreateResult, status_code=status.HTTP_201_CREATED)
def bulk_create_posts_endpoint(
    payload: list[PostCreate],
    client: TenantScopedClient = Depends(get_scoped_client),
):
    try:
        count = client.post.create_many([item.model_dump() for item in payload])
    except IntegrityError as exc:
        raise _conflict() from exc
    return {"count": count}


@router.put("/posts/{post_id}", response_model=PostRead)
def upsert_post_endpoint(
    post_id: PostId,
    payload: PostCreate,
    client: TenantScopedClient = Depends(get_scoped_client),
):
    data = payload.model_dump(exclude={"tenant_id"})
    try:
        return client.post.upsert(
            {"id": post_id},
            create={**data, "id": post_id},
            update=data,
        )
    except IntegrityError as exc:
        raise _conflict() from exc


@router.patch("/posts/{post_id}", response_model=PostRead)
def update_post_endpoint(
    post_id: PostId,
    payload: PostUpdate,
    client: TenantScopedClient = Depends(get_scoped_client),
):
    changes = payload.model_dump(exclude_unset=True)
    if changes:
        try:
            updated = client.post.update_many({"id": post_id}, changes)
        except IntegrityError as exc:
            raise _conflict() from exc
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return client.post.find_unique_or_throw({"id": post_id})


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post_endpoint(post_id: PostId, client: TenantScopedClient = Depends(get_scoped_client)):
    deleted = client.post.delete_many({"id": post_id})
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
