from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from hotel_listing.core.dependencies import get_hotels_repository
from hotel_listing.repositories import HotelsRepository
from hotel_listing.schemas import CreateHotelDto, HotelDto, PagedResult, QueryParameters
from hotel_listing.schemas.common import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/hotels", tags=["hotels"])


def paging_parameters(
    start_index: int = Query(0, alias="startIndex"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    page_number: int = Query(0, alias="pageNumber"),
) -> QueryParameters:
    return QueryParameters(start_index=start_index, page_size=page_size, page_number=page_number)


@router.get("/all", response_model=list[HotelDto])
async def get_all_hotels(repo: HotelsRepository = Depends(get_hotels_repository)):
    return await repo.get_all_as(HotelDto)


@router.get("", response_model=PagedResult[HotelDto])
async def get_paged_hotels(
    query_parameters: QueryParameters = Depends(paging_parameters),
    repo: HotelsRepository = Depends(get_hotels_repository),
):
    return await repo.get_paged(HotelDto, query_parameters)


@router.get("/{hotel_id}", response_model=HotelDto)
async def get_hotel(hotel_id: int, repo: HotelsRepository = Depends(get_hotels_repository)):
    return await repo.get_as(hotel_id, HotelDto)


@router.put("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def put_hotel(hotel_id: int, payload: HotelDto, repo: HotelsRepository = Depends(get_hotels_repository)):
    await repo.update_from(hotel_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", response_model=HotelDto, status_code=status.HTTP_201_CREATED)
async def post_hotel(payload: CreateHotelDto, repo: HotelsRepository = Depends(get_hotels_repository)):
    return await repo.add_from(payload, HotelDto)


@router.delete("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hotel(hotel_id: int, repo: HotelsRepository = Depends(get_hotels_repository)):
    await repo.delete(hotel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
