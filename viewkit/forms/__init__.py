"""模型表单与表单字段控制器."""

from .controllers import (
    STANDARD_FORM_FIELD_CONTROLLERS,
    FormFieldController,
    FormFieldControllers,
    ModelBlobController,
    ModelBoolController,
    ModelChoiceController,
    ModelDateController,
    ModelDateTimeController,
    ModelDynamicChoiceController,
    ModelEmailController,
    ModelFileController,
    ModelFloatController,
    ModelIntController,
    ModelMultipleChoiceController,
    ModelPasswordController,
    ModelPhoneController,
    ModelStringController,
    ModelTextController,
    ModelUrlController,
    ModelValueControllerBase,
)
from .form import FieldError, Form

__all__ = [
    "STANDARD_FORM_FIELD_CONTROLLERS",
    "FieldError",
    "Form",
    "FormFieldController",
    "FormFieldControllers",
    "ModelBlobController",
    "ModelBoolController",
    "ModelChoiceController",
    "ModelDateController",
    "ModelDateTimeController",
    "ModelDynamicChoiceController",
    "ModelEmailController",
    "ModelFileController",
    "ModelFloatController",
    "ModelIntController",
    "ModelMultipleChoiceController",
    "ModelPasswordController",
    "ModelPhoneController",
    "ModelStringController",
    "ModelTextController",
    "ModelUrlController",
    "ModelValueControllerBase",
]
