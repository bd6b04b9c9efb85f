import json

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from quiz_tutor import constants
from quiz_tutor.web.dependencies import TranslatorDep

QUIZ_SETTINGS = {
    "defaultTimePerQuestion": constants.DEFAULT_TIME_PER_QUESTION,
    "defaultQuestionCount": constants.DEFAULT_QUESTION_COUNT,
    "timeOptions": list(constants.TIME_OPTIONS),
    "questionCountOptions": list(constants.QUESTION_COUNT_OPTIONS),
    "apiBaseUrl": constants.API_PREFIX,
}


async def spa(
    request: Request, full_path: str, translator: TranslatorDep
) -> HTMLResponse:
    # Unknown API paths must not fall through to the SPA shell
    if full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")

    locale = getattr(request.state, "locale", request.app.state.config.locale)
    return request.app.state.templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": translator.t(locale, "quiz.title"),
            "locale": locale,
            "quiz_settings_json": json.dumps(QUIZ_SETTINGS),
            "translations_json": json.dumps(
                translator.get_all(locale), ensure_ascii=False
            ),
        },
    )


ui_router = APIRouter()
ui_router.add_api_route(
    "/{full_path:path}",
    spa,
    response_class=HTMLResponse,
    methods=["GET"],
    include_in_schema=False,
)
