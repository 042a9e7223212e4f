from .survey import GraphRecord, SurveyConfig, run_survey

__all__ = ["GraphRecord", "SurveyConfig", "run_survey"]
