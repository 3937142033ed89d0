from fastapi import APIRouter

router = APIRouter()

@router.get(
    "",
    status_code=200,
    summary="Health check",
    description="Health check endpoint for the schema builder service"
)
def health_check():
    return {"status": "ok"}
