import re

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          A trailing "Row" is dropped. Example: PaymentRecordRow -> payment_records
          """
          base_name = cls.__name__
          if base_name.endswith("Row"):
               base_name = base_name[:-3]
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', base_name).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'
