"""FastAPI 애플리케이션 메인"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import calculate


# FastAPI 앱 생성
app = FastAPI(
    title="미국 주식 세금 계산 API",
    description="한국 투자자를 위한 미국 주식 매매 및 배당 세금 계산기",
    version="0.1.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 프로덕션에서는 특정 도메인만 허용
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(
    calculate.router,
    prefix="/api/v1/calculate",
    tags=["세금계산"]
)


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "미국 주식 세금 계산 API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """헬스체크 엔드포인트"""
    return {"status": "healthy"}


def run():
    """개발 서버 실행 (uvicorn)"""
    import uvicorn

    uvicorn.run("ustax.api.main:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":
    run()
