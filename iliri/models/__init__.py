from iliri.models.article import Article
from iliri.models.supplier import Supplier
from iliri.models.client import Client
from iliri.models.purchase import Purchase, PurchaseItem
from iliri.models.sale import Sale, SaleItem, PriceType, SaleStatus
from iliri.models.payment import Payment
from iliri.models.client_article_price import ClientArticlePrice
from iliri.models.notification import Notification, NotificationType
from iliri.models.analytics import DashboardAnalytics, TopProduct, ActiveClient
from iliri.models.user import User
