"""Admin maintenance of localised product copy."""
from typing import List, Optional
from uuid import UUID

from core.application.dtos.product_dto import ProductTranslationDto, ProductTranslationsDto
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.application.validation import check_max_length
from core.domain.entities.product import DEFAULT_LANGUAGE, ProductTranslation
from core.domain.exceptions import ConflictException
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class GetProductTranslationsQuery(Request):
    product_id: UUID


class TranslationFields(Request):
    name: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None


class AddProductTranslationCommand(TranslationFields):
    product_id: UUID
    language_code: str


class UpdateProductTranslationCommand(TranslationFields):
    product_id: UUID
    language_code: str


class DeleteProductTranslationCommand(Request):
    product_id: UUID
    language_code: str


def translation_errors(request: TranslationFields, language_code: str) -> List[str]:
    errors: List[str] = []
    code = (language_code or "").strip()
    if len(code) != 2 or not code.isalpha():
        errors.append("Language code must be 2 characters (ISO 639-1)")
    if not request.name or not request.name.strip() or len(request.name.strip()) > 255:
        errors.append("Name is required and cannot exceed 255 characters")
    check_max_length(errors, request.short_description, "Short description", 500)
    check_max_length(errors, request.meta_title, "Meta title", 200)
    check_max_length(errors, request.meta_description, "Meta description", 500)
    return errors


@validates(AddProductTranslationCommand)
class AddProductTranslationValidator(RequestValidator[AddProductTranslationCommand]):
    def validate(self, request: AddProductTranslationCommand) -> List[str]:
        return translation_errors(request, request.language_code)


@validates(UpdateProductTranslationCommand)
class UpdateProductTranslationValidator(RequestValidator[UpdateProductTranslationCommand]):
    def validate(self, request: UpdateProductTranslationCommand) -> List[str]:
        return translation_errors(request, request.language_code)


@handles(GetProductTranslationsQuery)
class GetProductTranslationsHandler(RequestHandler[GetProductTranslationsQuery, Result[ProductTranslationsDto]]):
    async def handle(self, request: GetProductTranslationsQuery) -> Result[ProductTranslationsDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)

        if product is None:
            return Result.not_found(PRODUCT_NOT_FOUND)

        translations = sorted(product.translations, key=lambda t: t.language_code)
        return Result.success(
            ProductTranslationsDto(
                product_id=product.id,
                default_language=DEFAULT_LANGUAGE,
                translations=[ProductTranslationDto.from_entity(t) for t in translations],
            )
        )


@handles(AddProductTranslationCommand)
class AddProductTranslationHandler(RequestHandler[AddProductTranslationCommand, Result[ProductTranslationDto]]):
    async def handle(self, request: AddProductTranslationCommand) -> Result[ProductTranslationDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                return Result.not_found(PRODUCT_NOT_FOUND)

            translation = ProductTranslation(
                language_code=request.language_code,
                name=request.name,
                short_description=request.short_description,
                description=request.description,
                meta_title=request.meta_title,
                meta_description=request.meta_description,
            )
            try:
                product.add_translation(translation)
            except ConflictException as e:
                return Result.conflict(e.message)

            await uow.products.save(product)
            await uow.commit()

        logger.info(f"Translation '{translation.language_code}' added to product {product.sku}")
        return Result.success(ProductTranslationDto.from_entity(translation))


@handles(UpdateProductTranslationCommand)
class UpdateProductTranslationHandler(RequestHandler[UpdateProductTranslationCommand, Result[ProductTranslationDto]]):
    async def handle(self, request: UpdateProductTranslationCommand) -> Result[ProductTranslationDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                return Result.not_found(PRODUCT_NOT_FOUND)

            translation = product.get_translation(request.language_code)
            if translation is None:
                return Result.not_found(
                    f"Translation for language '{request.language_code.strip().lower()}' not found"
                )

            translation.update(
                name=request.name,
                short_description=request.short_description,
                description=request.description,
                meta_title=request.meta_title,
                meta_description=request.meta_description,
            )
            product.touch()
            await uow.products.save(product)
            await uow.commit()

        return Result.success(ProductTranslationDto.from_entity(translation))


@handles(DeleteProductTranslationCommand)
class DeleteProductTranslationHandler(RequestHandler[DeleteProductTranslationCommand, Result[bool]]):
    async def handle(self, request: DeleteProductTranslationCommand) -> Result[bool]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                return Result.not_found(PRODUCT_NOT_FOUND)

            removed = product.remove_translation(request.language_code)
            if removed is None:
                return Result.not_found(
                    f"Translation for language '{request.language_code.strip().lower()}' not found"
                )

            await uow.products.save(product)
            await uow.commit()

        return Result.success(True)
