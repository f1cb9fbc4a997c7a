from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from hotel_listing.core.dependencies import get_countries_repository
from hotel_listing.exceptions.base import BadRequestError
from hotel_listing.repositories import CountriesRepository
from hotel_listing.schemas import CountryDto, CreateCountryDto, GetCountryDto, UpdateCountryDto

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=list[GetCountryDto])
async def get_countries(repo: CountriesRepository = Depends(get_countries_repository)):
    return await repo.get_all_as(GetCountryDto)


@router.get("/{country_id}", response_model=CountryDto)
async def get_country(country_id: int, repo: CountriesRepository = Depends(get_countries_repository)):
    return await repo.get_details(country_id)


@router.put("/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
async def put_country(
    country_id: int,
    payload: UpdateCountryDto,
    repo: CountriesRepository = Depends(get_countries_repository),
):
    if payload.id != country_id:
        raise BadRequestError("Invalid Record Id", fields=["id"])
    await repo.update_from(country_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", response_model=GetCountryDto, status_code=status.HTTP_201_CREATED)
async def post_country(payload: CreateCountryDto, repo: CountriesRepository = Depends(get_countries_repository)):
    return await repo.add_from(payload, GetCountryDto)


@router.delete("/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_country(country_id: int, repo: CountriesRepository = Depends(get_countries_repository)):
    await repo.delete(country_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
